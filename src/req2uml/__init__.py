"""req2uml – turn free-text requirements into validated class-diagram graphs."""

__version__ = "0.1.0"
