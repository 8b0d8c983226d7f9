"""JSON values with binary support, typed JSON objects, key trimming, simple JSON HTTP requests and connection settings."""

__version__ = "0.1.0"
__all__ = ["convert", "keymap", "values", "settings", "objects", "request", "library"]