"""Single-file terminal text editor with syntax coloring."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "controller",
    "render",
    "runtime",
    "syntax",
]

__version__ = "0.1.0"
