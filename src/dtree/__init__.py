"""Decision trees with expected-value analysis."""

__version__ = "0.1.0"
