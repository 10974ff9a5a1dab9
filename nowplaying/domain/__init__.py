"""Domain services for the now-playing widget."""
