"""Core configuration, auth and error handling."""
