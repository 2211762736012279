"""Top-level Cookshelf commands (auto-discovered)."""
