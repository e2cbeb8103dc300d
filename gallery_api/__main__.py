#!/usr/bin/env python3
"""
Image Gallery GraphQL API

Lists the files in the public images directory and lets clients toggle
per-image "liked" and "featured" flags.

Usage:
    python -m gallery_api                  # Serve on HOST:PORT
    python -m gallery_api --port 8080      # Override the port
    python -m gallery_api --mirror-only    # Copy SOURCE_IMAGES_DIR and exit
"""
import argparse
import os
import sys

import uvicorn
from loguru import logger

from gallery_api.app import configure_logging, create_app, prepare_images
from shared.config import get_settings


def apply_overrides(settings, host=None, port=None):
    """Apply --host/--port to settings and to the environment.

    With --reload uvicorn re-imports gallery_api.main in a child process that
    builds its own Settings from the environment.
    """
    if host is not None:
        settings.host = host
        os.environ["HOST"] = host
    if port is not None:
        settings.port = port
        os.environ["PORT"] = str(port)
    return settings


def main():
    parser = argparse.ArgumentParser(description="Image Gallery GraphQL API")
    parser.add_argument("--host", help="Bind address (default: HOST setting)")
    parser.add_argument("--port", type=int, help="Port (default: PORT setting)")
    parser.add_argument("--mirror-only", action="store_true", help="Mirror source images and exit")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    settings = apply_overrides(get_settings(), args.host, args.port)

    configure_logging(settings)

    try:
        if args.mirror_only:
            if settings.get_source_path() is None:
                logger.error("SOURCE_IMAGES_DIR is not set")
                sys.exit(1)
            count = prepare_images(settings)
            logger.info(f"Mirror complete: {count} files")
            return

        if args.reload:
            uvicorn.run("gallery_api.main:app", host=settings.host, port=settings.port, reload=True)
        else:
            uvicorn.run(create_app(settings), host=settings.host, port=settings.port)

    except KeyboardInterrupt:
        logger.info("Shutting down...")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
