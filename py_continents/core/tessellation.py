"""
Bounded Voronoi tessellation of plate sites.

Sites are mirrored across the four edges of the map rectangle before the
Voronoi diagram is built, so the real cells close exactly on the rectangle.
The result is a partition of the rectangle: every point belongs to the
region of its nearest site. Nearest-site queries break ties towards the
site generated first.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np
import structlog
from scipy.spatial import Voronoi
from scipy.spatial.distance import cdist

logger = structlog.get_logger()

# Regions with less area than this are treated as degenerate
DEGENERATE_AREA = 1e-3


class Bounds(NamedTuple):
    """Axis-aligned bounding box in map space (y grows downwards)."""
    xl: float
    yt: float
    xr: float
    yb: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "Bounds":
        if width <= 0 or height <= 0:
            raise ValueError(f"Bounding box must have positive size, got {width}x{height}")
        return cls(0.0, 0.0, float(width), float(height))

    @property
    def width(self) -> float:
        return self.xr - self.xl

    @property
    def height(self) -> float:
        return self.yb - self.yt

    @property
    def area(self) -> float:
        return self.width * self.height

    def corners(self) -> np.ndarray:
        """Rectangle corners in boundary order."""
        return np.array(
            [
                [self.xl, self.yt],
                [self.xr, self.yt],
                [self.xr, self.yb],
                [self.xl, self.yb],
            ],
            dtype=np.float64,
        )

    def clamp(self, x: float, y: float):
        """Clamp a point into the box."""
        return (
            min(max(x, self.xl), self.xr),
            min(max(y, self.yt), self.yb),
        )


@dataclass
class Region:
    """The polygonal area owned by one site."""

    index: int
    site: np.ndarray       # [x, y] of the generating site
    vertices: np.ndarray   # (k, 2) ordered boundary loop, k may be 0

    @property
    def area(self) -> float:
        return abs(polygon_signed_area(self.vertices))

    def is_degenerate(self, min_area: float = DEGENERATE_AREA) -> bool:
        return len(self.vertices) < 3 or self.area < min_area

    def centroid(self) -> Optional[np.ndarray]:
        return compute_polygon_centroid(self.vertices)

    def contains(self, x: float, y: float, tolerance: float = 1e-9) -> bool:
        """Point-in-polygon test; regions are convex so edge signs suffice."""
        n = len(self.vertices)
        if n < 3:
            return False

        orientation = np.sign(polygon_signed_area(self.vertices))
        for i in range(n):
            x0, y0 = self.vertices[i]
            x1, y1 = self.vertices[(i + 1) % n]
            cross = (x1 - x0) * (y - y0) - (y1 - y0) * (x - x0)
            if cross * orientation < -tolerance:
                return False
        return True


def polygon_signed_area(vertices: np.ndarray) -> float:
    """Signed area via the shoelace sum."""
    n = len(vertices)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += vertices[i][0] * vertices[j][1] - vertices[j][0] * vertices[i][1]
    return area * 0.5


def polygon_area(vertices: np.ndarray) -> float:
    return abs(polygon_signed_area(vertices))


def compute_polygon_centroid(vertices: np.ndarray, min_area: float = DEGENERATE_AREA) -> Optional[np.ndarray]:
    """Compute the area-weighted centroid of a polygon.

    Args:
        vertices: Array of [x, y] vertex coordinates in boundary order
        min_area: Polygons with a smaller absolute area are degenerate

    Returns:
        [x, y] centroid coordinates, or None for degenerate polygons
    """
    if len(vertices) < 3:
        return None

    n = len(vertices)
    area = 0.0
    cx = 0.0
    cy = 0.0

    for i in range(n):
        j = (i + 1) % n
        a = vertices[i][0] * vertices[j][1] - vertices[j][0] * vertices[i][1]
        area += a
        cx += (vertices[i][0] + vertices[j][0]) * a
        cy += (vertices[i][1] + vertices[j][1]) * a

    area *= 0.5
    if abs(area) < min_area:
        return None

    cx /= (6.0 * area)
    cy /= (6.0 * area)

    return np.array([cx, cy])


def clip_polygon(vertices: np.ndarray, a: float, b: float, c: float) -> np.ndarray:
    """
    Clip a polygon to the half-plane ``a*x + b*y <= c``.

    One pass of Sutherland-Hodgman; convex input stays convex.
    """
    n = len(vertices)
    if n == 0:
        return vertices

    kept = []
    for i in range(n):
        current = vertices[i]
        following = vertices[(i + 1) % n]
        d_current = a * current[0] + b * current[1] - c
        d_following = a * following[0] + b * following[1] - c

        if d_current <= 0:
            kept.append(current)
        if (d_current < 0 < d_following) or (d_following < 0 < d_current):
            t = d_current / (d_current - d_following)
            kept.append(current + t * (following - current))

    if not kept:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(kept, dtype=np.float64)


def clip_to_bounds(vertices: np.ndarray, bounds: Bounds) -> np.ndarray:
    """Clip a convex polygon to the bounding box."""
    vertices = clip_polygon(vertices, -1.0, 0.0, -bounds.xl)
    vertices = clip_polygon(vertices, 1.0, 0.0, bounds.xr)
    vertices = clip_polygon(vertices, 0.0, -1.0, -bounds.yt)
    return clip_polygon(vertices, 0.0, 1.0, bounds.yb)


def get_mirror_points(sites: np.ndarray, bounds: Bounds) -> np.ndarray:
    """
    Reflect every site across the four edges of the box.

    A site and its mirror image share a bisector lying on the box edge, so
    the Voronoi cells of the real sites end exactly at the rectangle.
    """
    x = sites[:, 0]
    y = sites[:, 1]
    return np.vstack([
        np.column_stack([2 * bounds.xl - x, y]),
        np.column_stack([2 * bounds.xr - x, y]),
        np.column_stack([x, 2 * bounds.yt - y]),
        np.column_stack([x, 2 * bounds.yb - y]),
    ])


def get_boundary_points(bounds: Bounds) -> np.ndarray:
    """
    Four far-away corner points enclosing the sites and their mirrors.

    Only points on the convex hull get infinite Voronoi cells, so these keep
    every real cell finite, including sites lying on the box edge whose
    mirror coincides with themselves.
    """
    margin = 3.0 * max(bounds.width, bounds.height)
    return np.array(
        [
            [bounds.xl - margin, bounds.yt - margin],
            [bounds.xr + margin, bounds.yt - margin],
            [bounds.xr + margin, bounds.yb + margin],
            [bounds.xl - margin, bounds.yb + margin],
        ],
        dtype=np.float64,
    )


def tessellate(sites: np.ndarray, bounds: Bounds) -> List[Region]:
    """
    Partition ``bounds`` into one region per site.

    Builds a scipy Voronoi diagram over the sites, their mirror images and
    the boundary points, then clips each real cell to the box. Coincident
    sites are merged before Qhull sees them; the first copy keeps the cell
    and later copies get an empty region.

    Pure function of its inputs: no random draws, no hidden state.

    Args:
        sites: Array of shape (n, 2)
        bounds: Rectangle to partition

    Returns:
        Regions in site order
    """
    sites = np.asarray(sites, dtype=np.float64).reshape(-1, 2)
    if len(sites) == 0:
        raise ValueError("Cannot tessellate an empty site set")

    all_points = np.vstack([sites, get_mirror_points(sites, bounds), get_boundary_points(bounds)])

    # First occurrence of every distinct point, in input order
    _, first_index, inverse = np.unique(all_points, axis=0, return_index=True, return_inverse=True)
    first_index = first_index.astype(np.int64)
    inverse = np.asarray(inverse).reshape(-1)
    kept = np.sort(first_index)

    vor = Voronoi(all_points[kept])

    regions = []
    for i, site in enumerate(sites):
        owner = first_index[inverse[i]]
        if owner != i:
            regions.append(Region(index=i, site=site.copy(), vertices=np.empty((0, 2), dtype=np.float64)))
            continue

        region_idx = vor.point_region[np.searchsorted(kept, i)]
        vertex_ids = vor.regions[region_idx] if region_idx != -1 else []
        if -1 in vertex_ids or len(vertex_ids) < 3:
            raise RuntimeError(f"Voronoi cell of site {i} is unbounded")

        vertices = vor.vertices[vertex_ids]
        # Cells are convex around their site; order the loop by angle
        angles = np.arctan2(vertices[:, 1] - site[1], vertices[:, 0] - site[0])
        vertices = vertices[np.argsort(angles, kind="stable")]

        regions.append(Region(index=i, site=site.copy(), vertices=clip_to_bounds(vertices, bounds)))

    degenerate = sum(1 for region in regions if region.is_degenerate())
    logger.debug("Tessellation complete", regions=len(regions), degenerate=degenerate)
    return regions

def nearest_site(x: float, y: float, sites: np.ndarray) -> int:
    """
    Index of the site closest to (x, y).

    Linear scan on squared distance with a strict comparison, so ties go
    to the lowest index.
    """
    best = -1
    best_dist = float("inf")
    for i in range(len(sites)):
        dx = x - sites[i][0]
        dy = y - sites[i][1]
        dist = dx * dx + dy * dy
        if dist < best_dist:
            best_dist = dist
            best = i

    if best < 0:
        raise RuntimeError("Nearest-site query found no region; site set is empty")
    return best


def nearest_sites(points: np.ndarray, sites: np.ndarray) -> np.ndarray:
    """Vectorised ``nearest_site`` for an (m, 2) array of points."""
    if len(sites) == 0:
        raise RuntimeError("Nearest-site query found no region; site set is empty")

    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    distances = cdist(points, np.asarray(sites, dtype=np.float64), "sqeuclidean")
    # argmin returns the first minimum, matching the scan's tie-breaking
    return np.argmin(distances, axis=1)
