"""GST-aware invoice calculation engine for small retail shops."""

__version__ = "0.1.0"
