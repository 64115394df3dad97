"""Run the DocRelay backend: ``python -m docrelay`` or the ``docrelay`` script."""

import uvicorn

from docrelay.config import settings


def main() -> None:
    uvicorn.run(
        "docrelay.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
