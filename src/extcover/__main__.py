"""Allow ``python -m extcover``."""

from extcover.cli.main import cli

if __name__ == "__main__":
    cli()
