"""Entry point for ``python -m embedwatch``."""

from embedwatch.main import run

if __name__ == "__main__":
    run()
