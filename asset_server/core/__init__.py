"""Configuration, security and dependency wiring."""
