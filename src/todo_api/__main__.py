"""Run the API with uvicorn: ``python -m src.todo_api``."""

import uvicorn

from src.todo_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    # Lifespan failures (e.g. database unreachable) make uvicorn exit non-zero
    uvicorn.run(
        "src.todo_api.main:app",
        host=settings.http_host,
        port=settings.http_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
