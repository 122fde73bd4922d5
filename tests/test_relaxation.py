"""Tests for Lloyd relaxation."""

import pytest
import numpy as np
from py_continents.core.alea_prng import AleaPRNG
from py_continents.core.relaxation import cell_area_variance, relax_sites
from py_continents.core.sites import generate_sites
from py_continents.core.tessellation import Bounds, tessellate


@pytest.fixture
def bounds():
    return Bounds.from_size(84, 54)


class TestRelaxSites:
    """Test centroid relocation."""

    def test_zero_iterations(self, bounds):
        """No iterations returns an equal copy."""
        sites = generate_sites(12, 84, 54, AleaPRNG("relax"))
        relaxed = relax_sites(sites, bounds, n_iterations=0)

        np.testing.assert_array_equal(relaxed, sites)
        assert relaxed is not sites

    def test_input_untouched(self, bounds):
        """The input array is not modified."""
        sites = generate_sites(12, 84, 54, AleaPRNG("relax"))
        original = sites.copy()
        relax_sites(sites, bounds, n_iterations=3)

        np.testing.assert_array_equal(sites, original)

    def test_sites_stay_in_bounds(self, bounds):
        """Relaxed sites never escape the map."""
        for seed in range(10):
            sites = generate_sites(25, 84, 54, AleaPRNG(seed))
            relaxed = relax_sites(sites, bounds, n_iterations=3)

            assert np.all(relaxed[:, 0] >= 0) and np.all(relaxed[:, 0] <= 84)
            assert np.all(relaxed[:, 1] >= 0) and np.all(relaxed[:, 1] <= 54)

    def test_site_moves_to_centroid(self, bounds):
        """One iteration moves each site onto its region's centroid."""
        sites = generate_sites(8, 84, 54, AleaPRNG("centroid"))
        regions = tessellate(sites, bounds)
        relaxed = relax_sites(sites, bounds, n_iterations=1)

        for region in regions:
            np.testing.assert_allclose(relaxed[region.index], region.centroid())

    def test_single_site_moves_to_centre(self, bounds):
        """A lone site ends at the centre of the box."""
        relaxed = relax_sites(np.array([[3.0, 4.0]]), bounds, n_iterations=1)

        np.testing.assert_allclose(relaxed[0], [42.0, 27.0])

    def test_degenerate_region_keeps_site(self, bounds):
        """A site whose region is empty stays where it was."""
        sites = np.array([[30.0, 20.0], [30.0, 20.0], [70.0, 45.0]])
        relaxed = relax_sites(sites, bounds, n_iterations=1)

        np.testing.assert_array_equal(relaxed[1], [30.0, 20.0])
        assert not np.array_equal(relaxed[0], [30.0, 20.0])

    def test_no_random_draws(self, bounds):
        """Relaxation is deterministic and uses no stream."""
        sites = generate_sites(10, 84, 54, AleaPRNG("pure"))

        np.testing.assert_array_equal(
            relax_sites(sites, bounds, 3), relax_sites(sites, bounds, 3)
        )

    def test_negative_iterations(self, bounds):
        """Negative iteration counts are rejected."""
        with pytest.raises(ValueError):
            relax_sites(np.array([[1.0, 1.0]]), bounds, n_iterations=-1)


class TestRelaxationConvergence:
    """Statistical behaviour across seeds."""

    def test_area_variance_decreases(self, bounds):
        """Relaxed sites give more even region areas on average."""
        before = []
        after = []
        for seed in range(20):
            sites = generate_sites(20, 84, 54, AleaPRNG(f"variance-{seed}"))
            before.append(cell_area_variance(sites, bounds))
            after.append(cell_area_variance(relax_sites(sites, bounds, 3), bounds))

        assert np.mean(after) < np.mean(before)

    def test_variance_non_increasing_in_expectation(self, bounds):
        """Mean variance does not grow from one iteration to the next."""
        means = []
        for iterations in range(4):
            variances = []
            for seed in range(20):
                sites = generate_sites(20, 84, 54, AleaPRNG(f"iter-{seed}"))
                relaxed = relax_sites(sites, bounds, iterations)
                variances.append(cell_area_variance(relaxed, bounds))
            means.append(np.mean(variances))

        for earlier, later in zip(means, means[1:]):
            assert later <= earlier * 1.10
