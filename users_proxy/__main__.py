import logging

import uvicorn

from .config import load_settings
from .main import create_app


def main():
    settings = load_settings()
    logging.info("Proxy server running on port %s", settings.port)
    logging.info("Local: http://localhost:%s", settings.port)
    logging.info("Users endpoint: http://localhost:%s/users -> %s", settings.port, settings.upstream_url)
    logging.info("Health check: http://localhost:%s/health", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
