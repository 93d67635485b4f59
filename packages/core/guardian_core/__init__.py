"""Shared models and rule loading for env-guardian."""
