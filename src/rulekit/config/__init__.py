"""Configuration — section models, settings discovery, and logging setup."""
