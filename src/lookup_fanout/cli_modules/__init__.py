"""CLI support modules."""
