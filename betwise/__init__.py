"""BetWise: two-sided odds and stake calculator."""

__version__ = "1.0.0"
