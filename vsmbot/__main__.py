"""Entry point for ``python -m vsmbot``."""

from vsmbot.cli import cli

if __name__ == "__main__":
    cli()
