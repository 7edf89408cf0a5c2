"""ghedit - edit one file in a remote git repository with a regex and push it."""

__version__ = "1.0.0"
