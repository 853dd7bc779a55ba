"""goforge -- generates Go modular service projects."""

__version__ = "0.1.0"
