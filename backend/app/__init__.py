"""OAuth protected resource metadata gateway."""

__version__ = "0.1.0"
