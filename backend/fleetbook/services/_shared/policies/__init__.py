"""Pure authorization policies."""
