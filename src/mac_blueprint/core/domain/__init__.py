"""Domain models and entities.

Why:
- Pure data structures live here (Pydantic v2).
- The domain knows nothing about files, shells or the CLI: only blueprints.
"""
