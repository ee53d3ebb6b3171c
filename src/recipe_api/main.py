"""Application entry point.

Run with ``uvicorn recipe_api.main:app`` or the ``recipe-api`` script.
"""

from __future__ import annotations

import uvicorn

from recipe_api.core.config import get_settings
from recipe_api.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "recipe_api.main:app",
        host=settings.server.host,
        port=settings.listen_port,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    run()
