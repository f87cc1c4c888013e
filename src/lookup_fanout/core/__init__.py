"""Core lookup coordination components."""
