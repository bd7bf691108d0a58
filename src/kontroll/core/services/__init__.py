"""Core services (application use cases)."""
