from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from .config.store import ConfigStore
from .logging_setup import get_logger
from .settings import Settings
from .tweet import LatestImageSettings, MediaType, TweetClientError, TweetQuery, TwitterTweeter

log = get_logger("tweetwall.api")

PAGE_TEMPLATE = (
    "<html>"
    '<meta http-equiv="refresh" content="{refresh}"/>'
    "<head>"
    "<style>"
    "body {{ \n"
    "  background: url({media_url}) no-repeat center center fixed; \n"
    "  -webkit-background-size: cover;\n"
    "  -moz-background-size: cover;\n"
    "  -o-background-size: cover;\n"
    "  background-size: cover;\n"
    "}}"
    "</style>"
    "</head>"
    "<body></body>"
    "</html>"
)


def render_page(media_url: str, refresh_seconds: int = 10) -> str:
    return PAGE_TEMPLATE.format(media_url=media_url, refresh=refresh_seconds)


def latest_photo_url(tweeter: TwitterTweeter, page: LatestImageSettings) -> str:
    """First photo media URL among the matching tweets, or "" if there is none."""
    query = TweetQuery().result_type(page.result_type).query(page.query).count(page.count)
    for tweet in tweeter.search(query):
        for entry in tweet.media_entries:
            if entry.type == MediaType.photo:
                return entry.media_url
    return ""


def create_app(
    settings: Settings,
    store: Optional[ConfigStore] = None,
    tweeter: Optional[TwitterTweeter] = None,
) -> FastAPI:
    store = store if store is not None else ConfigStore.from_settings(settings)
    owns_tweeter = tweeter is None
    if tweeter is None:
        tweeter = TwitterTweeter.from_config(store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        # a tweeter passed in belongs to the caller
        if owns_tweeter:
            tweeter.close()

    app = FastAPI(title="Tweetwall Latest Image", version="0.3.0", lifespan=lifespan)
    app.state.store = store
    app.state.tweeter = tweeter

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/latest", response_class=HTMLResponse)
    def latest():
        page = store.get_typed("latestImage", LatestImageSettings, LatestImageSettings())
        try:
            media_url = latest_photo_url(tweeter, page)
        except TweetClientError as e:
            log.error("Tweet search failed: %s", e)
            media_url = ""
        return HTMLResponse(render_page(media_url, page.refresh_seconds))

    return app
