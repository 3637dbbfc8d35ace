"""
Entry point for ``python -m freetimefinder``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
