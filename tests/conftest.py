"""
Shared fixtures for tagsweep tests.

Trees are built under pytest's tmp_path; write_tree takes a mapping of
relative path → file content (str or bytes).
"""
from pathlib import Path

import pytest
from loguru import logger

from tagsweep.registry import DEFAULT_KEYWORDS, Registry


@pytest.fixture(autouse=True)
def _reset_logger():
    """CLI tests point loguru at captured streams; drop them afterwards."""
    yield
    logger.remove()


@pytest.fixture
def registry():
    return Registry(DEFAULT_KEYWORDS)


@pytest.fixture
def write_tree(tmp_path):
    def _write(files: dict) -> Path:
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return tmp_path
    return _write


@pytest.fixture
def sample_tree(write_tree):
    """The two-file tree from the README example."""
    return write_tree({
        "a.go": "package a\n\n// BUG: null deref\nfunc A() {}\n",
        "b.go": "// TODO: refactor\npackage b\n",
    })
