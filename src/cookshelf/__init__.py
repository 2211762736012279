"""
Cookshelf - cookbook dependency manager

Cookshelf reconciles a Cookfile against its lockfile, re-resolves cookbooks
when the Cookfile changes, and vendors the resolved cookbooks into a
project-local directory.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
