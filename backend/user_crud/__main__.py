"""Run the service with uvicorn: ``python -m user_crud``."""
from __future__ import annotations

import uvicorn

from user_crud.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "user_crud.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
