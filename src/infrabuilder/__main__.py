"""
Infra Builder - Main entry point

Delegates to cli.py.
"""

from .cli import cli

if __name__ == "__main__":
    cli()
