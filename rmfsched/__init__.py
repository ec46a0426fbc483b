"""Event conflict identification, time helpers, logging, error codes and notification clients."""

__version__ = "0.1.0"