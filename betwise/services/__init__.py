"""Stateful services around the pure stake arithmetic."""
