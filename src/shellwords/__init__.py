from .parser import MismatchedQuotes, escape, join, split

__all__ = [
    "MismatchedQuotes",
    "escape",
    "join",
    "split",
]
