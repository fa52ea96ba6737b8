"""Tests for the Airport Board integration."""
