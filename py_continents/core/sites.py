"""Initial plate site placement."""

import math

import numpy as np
import structlog

from .alea_prng import AleaPRNG

logger = structlog.get_logger()


def derive_site_count(
    width: float,
    height: float,
    prng: AleaPRNG,
    base_count: int = 18,
    jitter: float = 6.0,
    base_area: float = 4536.0,
) -> int:
    """
    Pick the number of tectonic plates for a map.

    The count grows with the square root of the map area relative to a
    standard sized map, plus a random jitter. Consumes one draw.

    Args:
        width: Map width
        height: Map height
        prng: Shared random stream
        base_count: Plate count for a map of ``base_area``
        jitter: Upper bound of the random extra plates
        base_area: Reference map area

    Returns:
        Number of plates, at least 1
    """
    scale = math.sqrt((width * height) / base_area)
    count = int(math.floor(base_count * scale + prng.random() * jitter))
    return max(1, count)


def generate_sites(count: int, width: float, height: float, prng: AleaPRNG) -> np.ndarray:
    """
    Scatter plate sites uniformly over the map.

    Two draws per site (x then y), in index order. There is no spacing
    guarantee here; Lloyd relaxation evens the distribution out afterwards.

    Args:
        count: Number of sites
        width: Map width
        height: Map height
        prng: Shared random stream

    Returns:
        Array of shape (count, 2) with [x, y] coordinates in
        [0, width) x [0, height)
    """
    if count < 1:
        raise ValueError(f"Site count must be at least 1, got {count}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Map dimensions must be positive, got {width}x{height}")

    sites = np.empty((count, 2), dtype=np.float64)
    for i in range(count):
        sites[i, 0] = prng.random() * width
        sites[i, 1] = prng.random() * height

    logger.info("Sites generated", count=count, width=width, height=height)
    return sites
