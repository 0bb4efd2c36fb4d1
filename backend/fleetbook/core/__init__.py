"""Core application wiring: config, extensions, logging and error handling."""
