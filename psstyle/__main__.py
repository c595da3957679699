"""
Main entry point for the psstyle package.

This allows the package to be run as a module:
python -m psstyle
"""

from .cli.commands import main

if __name__ == '__main__':
    main()
