"""
Thin tweet search client used by the latest-image page.
"""

from .client import TweetClientError, TwitterTweeter
from .models import MediaTweetEntry, MediaType, ResultType, Tweet, TweetEntry, TweetQuery
from .settings import LatestImageSettings, TwitterSettings

__all__ = [
    "TwitterTweeter",
    "TweetClientError",
    "TweetQuery",
    "ResultType",
    "Tweet",
    "TweetEntry",
    "MediaTweetEntry",
    "MediaType",
    "TwitterSettings",
    "LatestImageSettings",
]
