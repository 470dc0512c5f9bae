"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Process-wide defaults, overridable via ``IMAGEBLUR_*`` environment variables."""

    # Effect settings
    SCALE_FACTOR: float = 0.2  # Scale before blur (0.1-1.0). Lower = faster + blurrier
    BLUR_RADIUS: int = 20  # Blur radius in pixels, clamped to 1-25
    DARKEN_ALPHA: float = 0.18  # Black overlay alpha (0.0-1.0). Higher = darker

    # Output settings
    OUTPUT_SUFFIX: str = "_blur"
    DEFAULT_EXTENSION: str = ".png"  # Used if the source name has no extension
    JPEG_QUALITY: int = 95

    LOG_LEVEL: str = "WARNING"

    model_config = {"env_prefix": "IMAGEBLUR_"}


settings = Settings()
