"""Core business logic layer.

Subpackages:
- matching: which recipes a pantry can cook
- shopping: building and merging shopping lists
- search: free-text and category filtering of recipes
- pantry: pantry setup checks and expiry analysis

Everything here works on detached domain snapshots and performs no I/O.
"""
__all__ = ["matching", "shopping", "search", "pantry"]
