"""Colour classification strategies.

Each module here defines a `strategy` object and is picked up by
navtile.registry. The module docstring is what `navtile-tool help <name>`
prints.
"""
