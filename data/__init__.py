"""MLB Stats API access."""
