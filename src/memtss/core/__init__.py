"""Core domain models, matching and ports."""
