"""Station blueprint generator — share link in, construction plan out."""

__version__ = "0.1.0"
