"""Core utilities: settings, identifiers and input normalization."""
