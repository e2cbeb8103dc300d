"""Configuration management for the image gallery API."""
from pathlib import Path
from typing import List, Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.models import ImageState


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='allow',
        env_ignore_empty=True
    )

    # Images
    images_dir: str = Field(default="public/images")
    # When set, copied into images_dir at startup
    source_images_dir: Optional[str] = None
    src_prefix: str = "/images"

    # Like / featured state
    state_backend: Literal["memory", "json"] = "memory"
    state_file: str = "data/image-data.json"
    # IMAGE_DATA env var, a JSON list of {"id", "likes", "isFeatured"}
    image_data: List[ImageState] = Field(default_factory=list)

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 4000
    graphql_path: str = "/graphql"
    graphiql: bool = True
    serve_images: bool = True

    # CORS
    cors_origins: List[str] = Field(default_factory=lambda: ["https://esaote.netlify.app"])
    cors_allow_credentials: bool = True

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    def get_images_path(self) -> Path:
        """Absolute path of the public images directory."""
        return Path(self.images_dir).resolve()

    def get_source_path(self) -> Optional[Path]:
        """Absolute path of the mirror source, if one is configured."""
        if not self.source_images_dir:
            return None
        return Path(self.source_images_dir).resolve()

    def get_state_path(self) -> Path:
        """Absolute path of the JSON state file."""
        return Path(self.state_file).resolve()

    def ensure_local_dirs(self):
        """Create necessary local directories."""
        dirs = [self.get_images_path()]
        if self.log_dir:
            dirs.append(Path(self.log_dir))
        if self.state_backend == "json":
            dirs.append(self.get_state_path().parent)
        for dir_path in dirs:
            Path(dir_path).mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
