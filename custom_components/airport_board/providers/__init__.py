"""Data providers for the Airport Board integration."""
