"""
Infrastructure Package
======================

Wires application services together. ``container`` holds the explicitly
constructed service context; views reach it through ``get_container()``.
"""
