"""
Entry point for running tokenrefresh as a module: python -m tokenrefresh
"""

from tokenrefresh.cli.commands import app

if __name__ == "__main__":
    app()
