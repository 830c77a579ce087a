"""Run the QuantBot HTTP server: ``python -m quantbot.server``."""

import uvicorn

from ..config.loader import ConfigLoader
from ..logging.config import configure_logging
from .app import create_app


def main() -> None:
    config = ConfigLoader.create().load()
    configure_logging(config.logging)
    app = create_app(config)
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    main()
