"""Entry point for ``uvicorn storefront_admin.main:app``."""

import uvicorn

from .app import create_app
from .config.settings import get_settings

app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "storefront_admin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    run()
