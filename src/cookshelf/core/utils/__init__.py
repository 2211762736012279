"""Shared helpers for the cookshelf core."""
