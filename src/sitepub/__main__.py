"""Allow ``python -m sitepub``."""

from sitepub.cli import cli

if __name__ == "__main__":
    cli()
