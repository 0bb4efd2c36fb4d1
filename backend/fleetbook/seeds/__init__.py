"""Development fixtures."""
