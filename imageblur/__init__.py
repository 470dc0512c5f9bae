"""
imageblur - Frosted glass image filter: scale down, stack blur, scale up, darken
"""

from .raster import Raster, pack_argb, unpack_argb
from .scaler import scale
from .stack_blur import stack_blur, MIN_RADIUS, MAX_RADIUS
from .darken import darken
from .pipeline import BlurPipeline, PipelineConfig, Stage, blur, process
from .codec import ImageDecodeError, decode, encode, load
from .config import Settings, settings

__all__ = [
    # Data model
    "Raster",
    "pack_argb",
    "unpack_argb",
    # Stages
    "scale",
    "stack_blur",
    "MIN_RADIUS",
    "MAX_RADIUS",
    "darken",
    # Pipeline
    "BlurPipeline",
    "PipelineConfig",
    "Stage",
    "blur",
    "process",
    # Codec
    "ImageDecodeError",
    "decode",
    "encode",
    "load",
    # Configuration
    "Settings",
    "settings",
]

__version__ = "0.1.0"
