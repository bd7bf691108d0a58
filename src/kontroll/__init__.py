"""kontroll: command-line control of keyboards through the controller daemon."""

__version__ = "0.1.0"
