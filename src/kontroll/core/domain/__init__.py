"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) and the hex color codec.
- The domain does not know about HTTP, sockets or the CLI.
"""
