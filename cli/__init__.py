"""
CLI package for pkg-learn.

This package provides the command-line interface around the interactive
snippet browser.
"""

from .version import __version__
