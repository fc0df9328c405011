"""Wire contracts for the JSON API."""
