"""Teacher Panel API - administrator review of teacher applications."""

__version__ = "0.1.0"
