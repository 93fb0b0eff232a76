"""
Feed layout definitions sub-package for amfi-nav.

Contains YAML files that define the column legend and column-to-field
mapping for each known AMFI NAV feed variant. The loader module
(layout_registry.py in the parent package) reads these files at runtime.
"""
