"""QuickData: a typed key-value store persisted to one encrypted file."""

__version__ = "0.1.0"
