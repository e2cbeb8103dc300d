"""FastAPI application serving the gallery GraphQL API and image files."""
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from strawberry.fastapi import GraphQLRouter

from gallery_api.schema import schema
from shared.catalog import ImageCatalog, ImageDirectoryError
from shared.config import Settings, get_settings
from shared.gallery import GalleryService
from shared.mirror import mirror_directory
from shared.state_store import build_state_store


def configure_logging(settings: Settings):
    """Send loguru output to stderr and, if LOG_DIR is set, to daily files."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>",
        level=settings.log_level.upper()
    )
    if settings.log_dir:
        logger.add(
            Path(settings.log_dir) / "gallery_api_{time}.log",
            rotation="1 day",
            retention="30 days",
            level="DEBUG"
        )


def prepare_images(settings: Settings) -> int:
    """Create the images directory and run the mirror if one is configured."""
    settings.ensure_local_dirs()
    source = settings.get_source_path()
    if source is None:
        return 0
    return mirror_directory(source, settings.get_images_path())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    catalog = ImageCatalog(settings.get_images_path(), settings.src_prefix)
    store = build_state_store(settings)
    gallery = GalleryService(catalog, store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        prepare_images(settings)
        logger.info(f"Server ready at http://{settings.host}:{settings.port}{settings.graphql_path}")
        yield
        logger.info("Shutting down...")

    app = FastAPI(title="Image Gallery API", lifespan=lifespan)
    app.state.settings = settings
    app.state.gallery = gallery

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    def get_context():
        return {"gallery": gallery}

    graphql_app = GraphQLRouter(
        schema,
        path=settings.graphql_path,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphiql else None,
    )
    app.include_router(graphql_app)

    @app.get("/api/health")
    def api_health():
        try:
            image_count = len(catalog.list_files())
            status = "ok"
        except ImageDirectoryError:
            image_count = None
            status = "degraded"
        return {
            "status": status,
            "timestamp": datetime.utcnow().isoformat(),
            "images": image_count,
            "state_backend": store.backend,
        }

    mount_path = settings.src_prefix.rstrip("/")
    if settings.serve_images and mount_path:
        app.mount(
            mount_path,
            StaticFiles(directory=str(settings.get_images_path()), check_dir=False),
            name="images",
        )

    return app
