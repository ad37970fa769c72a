"""
Tests for the tweet search client, using httpx.MockTransport instead of the network.
"""

import json

import httpx
import pytest

from tweetwall.config import ConfigStore
from tweetwall.tweet import (
    MediaType,
    ResultType,
    TweetClientError,
    TweetQuery,
    TwitterSettings,
    TwitterTweeter,
)
from tweetwall.tweet.settings import TwitterSettingsConverter

PAYLOAD = {
    "data": [
        {"id": "1", "text": "no media"},
        {"id": "2", "text": "a video", "attachments": {"media_keys": ["m_vid"]}},
        {"id": "3", "text": "a photo", "attachments": {"media_keys": ["m_photo", "m_gone"]}},
    ],
    "includes": {
        "media": [
            {"media_key": "m_vid", "type": "video", "preview_image_url": "https://img/vid.jpg"},
            {"media_key": "m_photo", "type": "photo", "url": "https://img/photo.jpg"},
        ]
    },
}


def make_tweeter(handler, **settings):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return TwitterTweeter(TwitterSettings(**settings), client=client)


class TestTweetQuery:
    def test_fluent_setters(self):
        q = TweetQuery().result_type(ResultType.recent).query("JCreteCharity").count(10)
        assert q.query_text == "JCreteCharity"
        assert q.result_type_value is ResultType.recent
        assert q.count_value == 10

    def test_count_must_be_positive(self):
        with pytest.raises(ValueError):
            TweetQuery().count(0)


class TestTwitterTweeter:
    def test_search_parses_media(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json=PAYLOAD)

        tweeter = make_tweeter(handler, bearerToken="tkn")
        tweets = list(tweeter.search(TweetQuery().query("JCreteCharity").result_type("recent").count(10)))

        assert [t.id for t in tweets] == ["1", "2", "3"]
        assert tweets[0].media_entries == []
        assert tweets[1].media_entries[0].type is MediaType.video
        assert tweets[1].media_entries[0].media_url == "https://img/vid.jpg"
        assert len(tweets[2].media_entries) == 1
        assert tweets[2].media_entries[0].media_url == "https://img/photo.jpg"

        request = seen["request"]
        assert request.url.path.endswith("/tweets/search/recent")
        assert request.url.params["query"] == "JCreteCharity"
        assert request.url.params["sort_order"] == "recency"
        assert request.headers["Authorization"] == "Bearer tkn"

    def test_count_limits_results_and_clamps_request(self):
        seen = {}

        def handler(request):
            seen["max_results"] = request.url.params["max_results"]
            return httpx.Response(200, json=PAYLOAD)

        tweets = list(make_tweeter(handler).search(TweetQuery().query("x").count(2)))
        assert len(tweets) == 2
        assert seen["max_results"] == "10"

    def test_no_token_sends_no_authorization(self):
        def handler(request):
            assert "Authorization" not in request.headers
            return httpx.Response(200, json={})

        assert list(make_tweeter(handler).search(TweetQuery().query("x"))) == []

    @pytest.mark.parametrize("status", [401, 403, 429, 500])
    def test_http_errors_raise(self, status):
        tweeter = make_tweeter(lambda request: httpx.Response(status, text="nope"))
        with pytest.raises(TweetClientError) as exc:
            tweeter.search(TweetQuery().query("x"))
        assert exc.value.status_code == status

    def test_transport_error_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(TweetClientError):
            make_tweeter(handler).search(TweetQuery().query("x"))

    def test_non_json_body_is_wrapped(self):
        tweeter = make_tweeter(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(TweetClientError) as exc:
            tweeter.search(TweetQuery().query("x"))
        assert exc.value.status_code == 200

    @pytest.mark.parametrize("body", [[1, 2], {"data": ["not a tweet"]}, {"includes": {"media": [7]}}])
    def test_unexpected_json_shape_is_wrapped(self, body):
        tweeter = make_tweeter(lambda request: httpx.Response(200, json=body))
        with pytest.raises(TweetClientError):
            tweeter.search(TweetQuery().query("x"))


def test_from_config_reads_converted_settings(tmp_path):
    (tmp_path / "tweetwallConfig.json").write_text(
        json.dumps({"twitter": {"bearerToken": "abc", "baseUrl": "https://example.test/2"}}),
        encoding="utf-8",
    )
    store = ConfigStore(
        [TwitterSettingsConverter()], resource_packages=(), home_dir=tmp_path / "none", work_dir=tmp_path
    )
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json={})

    tweeter = TwitterTweeter.from_config(store, client=httpx.Client(transport=httpx.MockTransport(handler)))
    list(tweeter.search(TweetQuery().query("x")))

    assert seen["url"].startswith("https://example.test/2/tweets/search/recent")
    assert "abc" not in repr(store.get("twitter"))
