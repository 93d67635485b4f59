"""Entry point for running env-guardian as a module."""

from env_guardian.cli.main import cli

if __name__ == "__main__":
    cli()
