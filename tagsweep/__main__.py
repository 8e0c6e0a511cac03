from tagsweep.cli import main_entry

main_entry()
