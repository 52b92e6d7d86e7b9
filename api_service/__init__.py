"""HTTP service for the AccessiCinema command engine."""
