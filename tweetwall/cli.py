from __future__ import annotations
import argparse
import json
import sys
import uvicorn
from pydantic import BaseModel
from .settings import Settings
from .logging_setup import setup_logging, get_logger
from .config import ConfigError, ConfigStore
from .api import create_app

log = get_logger("tweetwall.cli")


def _jsonable(value):
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return str(value)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="tweetwall")
    sub = parser.add_subparsers(dest="cmd", required=True)

    serve_p = sub.add_parser("serve", help="Run the latest-image web endpoint (FastAPI)")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    sub.add_parser("config", help="Print the merged configuration as JSON and exit")

    args = parser.parse_args(argv)
    settings = Settings()
    setup_logging(settings)

    try:
        store = ConfigStore.from_settings(settings)
    except ConfigError as e:
        log.error("Failed to load configuration: %s", e)
        return 1

    if args.cmd == "config":
        print(json.dumps(dict(store.snapshot()), indent=2, ensure_ascii=False, default=_jsonable))
        return 0

    if args.cmd == "serve":
        app = create_app(settings, store=store)
        uvicorn.run(
            app,
            host=args.host or settings.host,
            port=args.port or settings.port,
            log_level=settings.log_level.lower(),
        )
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
