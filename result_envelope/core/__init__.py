"""Configuration and exception handling."""
