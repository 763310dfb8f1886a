import logging

import uvicorn

from navhistory import config
from navhistory.api.app import create_app
from navhistory.container import Container

logger = logging.getLogger(__name__)


def main(container: Container = None):
    """Start the HTTP API.

    `container` may be injected (e.g. by tests) to override providers.
    uvicorn turns SIGINT/SIGTERM into a graceful shutdown, which runs the
    store's final save through the app lifespan.
    """
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if container is None:
        container = Container()

    history_store = container.history_store()
    app = create_app(history_store, cors_origins=container.config.NAVHISTORY_CORS_ORIGINS())

    host = container.config.NAVHISTORY_HOST()
    port = int(container.config.NAVHISTORY_PORT())
    logger.info("Starting server on http://%s:%s", host, port)
    try:
        uvicorn.run(app, host=host, port=port)
    except Exception:
        logger.exception("Failed to start server")
        raise


if __name__ == '__main__':
    main()
