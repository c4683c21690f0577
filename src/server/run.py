"""CLI entry point for launching the FastAPI app with uvicorn."""

import uvicorn

from .app import app
from .dependencies import get_config


def main() -> None:
    """Run the API server."""
    config = get_config()
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
