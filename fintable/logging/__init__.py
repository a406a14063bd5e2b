"""Console logging setup and the JSON Lines warning log."""
