"""Adapters: concrete implementations of the core interfaces (daemon I/O)."""
