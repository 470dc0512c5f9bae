# imageblur - Darken
"""
Darkening by compositing a uniform black layer on top of a raster.
"""

from __future__ import annotations

import logging

import numpy as np

from .raster import Raster, pack_argb

logger = logging.getLogger(__name__)


def darken(raster: Raster, alpha: float) -> Raster:
    """Composite an opaque black layer with the given opacity over the raster.

    Normal (source-over) blending with a black foreground reduces to scaling
    each color channel by ``1 - alpha``. The alpha channel is kept, so an
    opaque input stays opaque.

    Args:
        raster: The background raster
        alpha: Opacity of the black layer, 0.0 (no change) to 1.0 (black)

    Returns:
        A new raster with the input's dimensions
    """
    alpha = float(alpha)
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"Darken alpha must be in [0, 1], got {alpha}")
    logger.debug("darken %dx%d, alpha=%.3f", raster.width, raster.height, alpha)

    a, r, g, b = raster.channels()
    keep = 1.0 - alpha
    rgb = np.stack([r, g, b]).astype(np.float64) * keep
    rgb = np.clip(np.floor(rgb + 0.5), 0, 255).astype(np.uint32)
    return Raster(raster.width, raster.height, pack_argb(a, rgb[0], rgb[1], rgb[2]))
