"""fmdates — keep front matter dates in step with git history."""

__version__ = "0.3.0"
