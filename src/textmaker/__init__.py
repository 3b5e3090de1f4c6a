"""Generate bot-style replies by chaining token chunks drawn from sample messages."""

__version__ = "0.1.0"
