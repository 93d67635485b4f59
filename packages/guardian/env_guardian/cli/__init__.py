"""Command-line interface for env-guardian."""
