"""colour_checker.core: foundation layer.

Contains the colour value types, RGB to HSL conversion, notation parsing,
configuration loading, and the report builder.
This module has NO dependencies on colour_checker.commands or colour_checker.registry.
Only stdlib and numpy are allowed here.
"""
