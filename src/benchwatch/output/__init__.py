"""Report rendering and console output."""
