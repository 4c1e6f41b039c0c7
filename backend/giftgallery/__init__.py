"""Photo gallery API: password-protected folders with owned photos."""

__version__ = "1.0.0"
