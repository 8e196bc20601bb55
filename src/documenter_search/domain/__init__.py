"""Domain models for documentation records and search results."""
