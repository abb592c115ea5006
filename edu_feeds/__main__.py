"""Run the feed service with uvicorn: ``python -m edu_feeds``."""

import uvicorn

from edu_feeds.config.settings import FeedSettings


def main() -> None:
    settings = FeedSettings()
    uvicorn.run(
        "edu_feeds.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
