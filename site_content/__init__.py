"""Hierarchical content resolution and caching for the public tenant site."""
