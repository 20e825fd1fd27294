"""Core pipeline: entry parsing, filtering and aggregation."""
