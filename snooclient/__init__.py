"""A synchronous Reddit API client: account, collections, emoji, flair, gold and messages."""

__version__ = "0.1.0"