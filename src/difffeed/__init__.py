"""
DiffFeed - RSS feed of the files added to and removed from a directory tree.
"""

__version__ = "1.0.0"
