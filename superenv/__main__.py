"""
Entry point for running superenv as a module.

Usage: python -m superenv [command] [options]
"""

from superenv.cli.parser import main

if __name__ == "__main__":
    main()
