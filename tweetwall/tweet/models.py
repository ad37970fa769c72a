from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ResultType(str, Enum):
    recent = "recent"
    popular = "popular"
    mixed = "mixed"


class MediaType(str, Enum):
    photo = "photo"
    video = "video"
    animated_gif = "animated_gif"


class TweetQuery:
    """Search parameters; setters return self so calls can be chained."""

    def __init__(self) -> None:
        self.query_text: str = ""
        self.result_type_value: ResultType = ResultType.mixed
        self.count_value: int = 10

    def query(self, text: str) -> "TweetQuery":
        self.query_text = text
        return self

    def result_type(self, result_type: ResultType) -> "TweetQuery":
        self.result_type_value = ResultType(result_type)
        return self

    def count(self, count: int) -> "TweetQuery":
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        self.count_value = count
        return self

    def __repr__(self) -> str:
        return f"TweetQuery(query={self.query_text!r}, result_type={self.result_type_value.value}, count={self.count_value})"


@dataclass(frozen=True)
class TweetEntry:
    text: str
    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class MediaTweetEntry(TweetEntry):
    media_url: str = ""
    type: Optional[MediaType] = None


@dataclass(frozen=True)
class Tweet:
    id: str
    text: str
    media_entries: List[MediaTweetEntry] = field(default_factory=list)
