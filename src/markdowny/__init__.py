"""Toggle markdown surrounds around editor selections."""

__all__ = [
    "adapters",
    "config",
    "host",
    "keymaps",
    "plugin",
    "runtime",
    "selection",
    "surround",
]

__version__ = "0.1.0"
