"""Core interfaces/abstractions.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- The resolver depends on `KeyboardController`, never on httpx.
"""
