"""Entrypoint for launching the Bendscape FastAPI server."""
from __future__ import annotations

import uvicorn

from bendscape.config import AppSettings


def main() -> None:
    settings = AppSettings.from_env()
    uvicorn.run("bendscape.server.app:app", host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    main()
