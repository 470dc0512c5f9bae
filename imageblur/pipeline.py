# imageblur - Pipeline
"""
The frosted glass pipeline: scale down, stack blur, scale up, darken.

Usage:
    from imageblur.pipeline import BlurPipeline, PipelineConfig

    pipeline = BlurPipeline(PipelineConfig(scale_factor=0.25, blur_radius=12))
    result = pipeline.process(raster)

Progress can be observed by passing a listener, which is called with the
:class:`Stage` about to run:

    pipeline = BlurPipeline(listener=lambda stage: print(stage.status))
"""

from __future__ import annotations

import logging
import math
import time
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import Settings, settings
from .darken import darken
from .raster import Raster
from .scaler import scale
from .stack_blur import MAX_RADIUS, MIN_RADIUS, stack_blur

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Steps of the pipeline in execution order."""

    SCALE_DOWN = "scale_down"
    BLUR = "blur"
    SCALE_UP = "scale_up"
    DARKEN = "darken"

    @property
    def status(self) -> str:
        """Human readable status text for progress reporting."""
        if self is Stage.DARKEN:
            return "Applying darken effect..."
        return "Applying blur..."


StageListener = Callable[[Stage], None]


class PipelineConfig(BaseModel):
    """Parameters of the blur pipeline.

    Accepts snake_case names as well as the camelCase aliases
    (``scaleFactor``, ``blurRadius``, ``darkenAlpha``).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra='ignore',
    )

    scale_factor: float = Field(default=0.2, gt=0.0, le=1.0, alias='scaleFactor')
    blur_radius: int = Field(default=20, alias='blurRadius')
    darken_alpha: float = Field(default=0.18, ge=0.0, le=1.0, alias='darkenAlpha')

    @field_validator('blur_radius', mode='before')
    @classmethod
    def _clamp_radius(cls, value: Any) -> int:
        """Truncate to int and clamp into the supported radius range.

        Non-numeric and non-finite values (None, inf, nan) are rejected.
        """
        try:
            radius = int(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"Blur radius must be a finite number, got {value!r}") from e
        return min(max(radius, MIN_RADIUS), MAX_RADIUS)

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> PipelineConfig:
        """Build a config from the process-wide settings."""
        source = source or settings
        return cls(
            scale_factor=source.SCALE_FACTOR,
            blur_radius=source.BLUR_RADIUS,
            darken_alpha=source.DARKEN_ALPHA,
        )


def _scaled_size(size: int, factor: float) -> int:
    return max(1, int(math.floor(size * factor + 0.5)))


class BlurPipeline:
    """Runs the scale/blur/darken transform with a fixed configuration.

    The pipeline holds no per-call state; one instance may be shared between
    threads.
    """

    def __init__(self, config: PipelineConfig | None = None, listener: StageListener | None = None):
        """
        :param config: The configuration, the process-wide defaults if omitted
        :param listener: Optional callable notified before each stage runs
        """
        self.config = config if config is not None else PipelineConfig.from_settings()
        self.listener = listener

    def _enter(self, stage: Stage) -> float:
        if self.listener is not None:
            self.listener(stage)
        return time.perf_counter()

    def blur(self, raster: Raster) -> Raster:
        """Scale down, stack blur and scale back up to the original size.

        The final upscale is part of the softening, not just a size restore.
        """
        cfg = self.config
        scaled_width = _scaled_size(raster.width, cfg.scale_factor)
        scaled_height = _scaled_size(raster.height, cfg.scale_factor)
        logger.debug(
            "blur %dx%d via %dx%d, radius=%d",
            raster.width, raster.height, scaled_width, scaled_height, cfg.blur_radius,
        )

        start = self._enter(Stage.SCALE_DOWN)
        down = scale(raster, scaled_width, scaled_height)
        scale_down_time = time.perf_counter() - start

        start = self._enter(Stage.BLUR)
        blurred = stack_blur(down, cfg.blur_radius)
        blur_time = time.perf_counter() - start

        start = self._enter(Stage.SCALE_UP)
        result = scale(blurred, raster.width, raster.height)
        scale_up_time = time.perf_counter() - start

        logger.debug(
            "blur completed (scale_down=%.1fms, stack_blur=%.1fms, scale_up=%.1fms)",
            scale_down_time * 1000, blur_time * 1000, scale_up_time * 1000,
        )
        return result

    def darken(self, raster: Raster) -> Raster:
        """Apply the configured black overlay."""
        start = self._enter(Stage.DARKEN)
        result = darken(raster, self.config.darken_alpha)
        logger.debug("darken completed in %.1fms", (time.perf_counter() - start) * 1000)
        return result

    def process(self, raster: Raster) -> Raster:
        """Run the complete pipeline.

        :param raster: The source raster
        :return: The frosted and darkened raster, same size as the source
        """
        return self.darken(self.blur(raster))


def blur(raster: Raster, radius: int | None = None, config: PipelineConfig | None = None) -> Raster:
    """Scale down, blur and scale up using ``config`` or the defaults.

    :param raster: The source raster
    :param radius: Overrides the configured blur radius, clamped to 1-25
    :param config: The configuration, the process-wide defaults if omitted
    :return: The blurred raster, same size as the source
    """
    config = config if config is not None else PipelineConfig.from_settings()
    if radius is not None:
        # rebuilt instead of model_copy, so the radius passes the validator
        config = PipelineConfig(
            scale_factor=config.scale_factor,
            blur_radius=radius,
            darken_alpha=config.darken_alpha,
        )
    return BlurPipeline(config).blur(raster)


def process(raster: Raster, config: PipelineConfig | None = None) -> Raster:
    """Run the full pipeline using ``config`` or the defaults."""
    return BlurPipeline(config).process(raster)
