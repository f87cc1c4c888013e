"""Source construction from configuration."""
