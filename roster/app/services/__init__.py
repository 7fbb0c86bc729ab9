"""Business services for the roster application."""
