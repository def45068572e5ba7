"""Allow ``python -m pooppdf``."""

from pooppdf.cli.app import run

if __name__ == "__main__":
    run()
