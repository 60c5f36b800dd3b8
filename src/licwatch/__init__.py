"""licwatch — typed item model and license expiration watch for a content store."""

__version__ = "0.4.0"
