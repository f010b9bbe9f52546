"""Allow ``python -m cratekit``."""

from cratekit.cli import cli

if __name__ == "__main__":
    cli()
