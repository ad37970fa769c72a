from __future__ import annotations
from typing import Any, Dict, Iterator, List, Optional

import httpx

from ..config.store import ConfigStore
from ..logging_setup import get_logger
from .models import MediaTweetEntry, MediaType, ResultType, Tweet, TweetQuery
from .settings import TwitterSettings

log = get_logger("tweetwall.tweet.client")

_SORT_ORDER = {
    ResultType.recent: "recency",
    ResultType.popular: "relevancy",
    ResultType.mixed: "relevancy",
}

# recent search accepts max_results between 10 and 100
_MIN_RESULTS = 10
_MAX_RESULTS = 100


class TweetClientError(RuntimeError):
    """Raised when the search API call fails."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TwitterTweeter:
    """Thin wrapper around the Twitter v2 recent search endpoint."""

    def __init__(
        self,
        settings: TwitterSettings,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._settings = settings
        self._client = client or httpx.Client(timeout=settings.timeout)

    @classmethod
    def from_config(cls, store: ConfigStore, client: Optional[httpx.Client] = None) -> "TwitterTweeter":
        settings = store.get_typed("twitter", TwitterSettings, TwitterSettings())
        return cls(settings, client)

    def close(self) -> None:
        self._client.close()

    def search(self, query: TweetQuery) -> Iterator[Tweet]:
        url = self._settings.base_url.rstrip("/") + "/tweets/search/recent"
        params = {
            "query": query.query_text,
            "max_results": min(max(query.count_value, _MIN_RESULTS), _MAX_RESULTS),
            "sort_order": _SORT_ORDER[query.result_type_value],
            "expansions": "attachments.media_keys",
            "media.fields": "type,url,preview_image_url",
        }
        log.debug("Searching tweets: %r", query)
        try:
            response = self._client.get(url, headers=self._build_headers(), params=params)
        except httpx.HTTPError as e:
            raise TweetClientError(f"Tweet search failed: {e}") from e
        if response.status_code in {401, 403}:
            raise TweetClientError(
                "Search API rejected the request (check bearerToken)", status_code=response.status_code
            )
        if response.status_code != 200:
            raise TweetClientError(
                f"Search API error {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            tweets = _parse_tweets(response.json())
        except (ValueError, AttributeError, TypeError) as e:
            raise TweetClientError(
                f"Unexpected search API response: {e}", status_code=response.status_code
            ) from e
        return iter(tweets[: query.count_value])

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.bearer_token is not None:
            headers["Authorization"] = f"Bearer {self._settings.bearer_token.get_secret_value()}"
        return headers


def _parse_tweets(payload: Dict[str, Any]) -> List[Tweet]:
    media_by_key = {
        m.get("media_key"): m for m in (payload.get("includes") or {}).get("media", []) or []
    }
    tweets = []
    for raw in payload.get("data", []) or []:
        entries = []
        for media_key in (raw.get("attachments") or {}).get("media_keys", []) or []:
            media = media_by_key.get(media_key)
            if media is None:
                continue
            try:
                media_type: Optional[MediaType] = MediaType(media.get("type"))
            except ValueError:
                media_type = None
            entries.append(MediaTweetEntry(
                text=media_key,
                media_url=media.get("url") or media.get("preview_image_url") or "",
                type=media_type,
            ))
        tweets.append(Tweet(id=str(raw.get("id", "")), text=raw.get("text", ""), media_entries=entries))
    return tweets
