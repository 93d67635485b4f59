"""env-guardian: find environment variable usage and hardcoded values that should be env vars."""

from env_guardian.version import __version__

__all__ = ["__version__"]
