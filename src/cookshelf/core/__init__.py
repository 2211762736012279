"""Cookshelf core library (no command-line concerns)."""
