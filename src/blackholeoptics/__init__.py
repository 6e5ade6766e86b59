"""Black-hole optics: interactive light paths around a compact body."""

__version__ = "0.1.0"
