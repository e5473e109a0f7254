"""Lead intake and moderation API."""

__version__ = "1.0.0"
