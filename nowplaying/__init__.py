"""Now-playing widget service backed by a single stored Spotify credential."""
