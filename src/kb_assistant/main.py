"""Entrypoint: run the knowledge-base assistant server."""

import uvicorn

from kb_assistant.api.app import create_app
from kb_assistant.config.settings import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(create_app(), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
