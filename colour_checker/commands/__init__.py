"""colour-tool commands.

Each module here defines a `command` object and is picked up by
colour_checker.registry.all_commands(); nothing is imported eagerly.
"""
