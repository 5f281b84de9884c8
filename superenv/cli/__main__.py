"""
Entry point for running the superenv CLI as a module.

Usage: python -m superenv.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
