"""Lloyd relaxation of plate sites."""

import numpy as np
import structlog

from .tessellation import Bounds, DEGENERATE_AREA, compute_polygon_centroid, tessellate

logger = structlog.get_logger()


def relax_sites(sites: np.ndarray, bounds: Bounds, n_iterations: int = 3,
                min_area: float = DEGENERATE_AREA) -> np.ndarray:
    """Apply Lloyd's relaxation to even out the site distribution.

    Each iteration tessellates the current sites and moves every site to
    the centroid of its region, clamped to the map bounds. Sites whose
    region is degenerate (fewer than 3 vertices or near-zero area) stay
    where they are.

    A few iterations are enough; running to convergence would make the
    plates look uniform.

    Args:
        sites: Sites to relax, shape (n, 2)
        bounds: Map rectangle
        n_iterations: Number of relaxation iterations
        min_area: Area below which a region counts as degenerate

    Returns:
        Relaxed site coordinates (the input array is left untouched)
    """
    if n_iterations < 0:
        raise ValueError(f"Relaxation iterations must be non-negative, got {n_iterations}")

    logger.info("Starting Lloyd's relaxation", iterations=n_iterations, sites=len(sites))

    sites = np.array(sites, dtype=np.float64)  # Don't modify original

    for iteration in range(n_iterations):
        regions = tessellate(sites, bounds)
        relaxed = sites.copy()
        kept = 0

        for region in regions:
            centroid = compute_polygon_centroid(region.vertices, min_area)
            if centroid is None:
                kept += 1
                continue

            relaxed[region.index] = bounds.clamp(centroid[0], centroid[1])

        sites = relaxed
        logger.info(f"Relaxation iteration {iteration + 1} complete", degenerate=kept)

    return sites


def cell_area_variance(sites: np.ndarray, bounds: Bounds) -> float:
    """Variance of region areas; lower means a more even distribution."""
    regions = tessellate(sites, bounds)
    return float(np.var([region.area for region in regions]))
