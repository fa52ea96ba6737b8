"""Airport directory providers."""
