"""Service modules"""
from .feed_service import FeedService

__all__ = ["FeedService"]
