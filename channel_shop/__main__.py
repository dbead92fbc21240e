"""Entry point for running the package as a module."""

from channel_shop.cli import app

if __name__ == "__main__":
    app()
