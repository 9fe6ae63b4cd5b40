"""
Taxonomy Module.

Single source of truth for the closed set of topics and categories.
"""
