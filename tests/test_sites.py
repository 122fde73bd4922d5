"""Tests for plate site generation."""

import pytest
import numpy as np
from py_continents.core.alea_prng import AleaPRNG
from py_continents.core.sites import derive_site_count, generate_sites


class TestGenerateSites:
    """Test initial site placement."""

    def test_site_count(self):
        """The requested number of sites is produced."""
        sites = generate_sites(20, 84, 54, AleaPRNG("test_seed"))

        assert sites.shape == (20, 2)

    def test_site_bounds(self):
        """All sites fall inside [0, width) x [0, height)."""
        width, height = 84, 54
        sites = generate_sites(200, width, height, AleaPRNG("test_seed"))

        assert np.all(sites[:, 0] >= 0)
        assert np.all(sites[:, 0] < width)
        assert np.all(sites[:, 1] >= 0)
        assert np.all(sites[:, 1] < height)

    def test_two_draws_per_site(self):
        """Each site consumes exactly two draws, x then y."""
        prng = AleaPRNG("draws")
        generate_sites(7, 10, 10, prng)

        assert prng.call_count == 14

        reference = AleaPRNG("draws")
        sites = generate_sites(1, 10, 6, AleaPRNG("draws"))
        assert sites[0, 0] == reference.random() * 10
        assert sites[0, 1] == reference.random() * 6

    def test_consistency(self):
        """Same seed produces the same sites."""
        sites1 = generate_sites(10, 50, 50, AleaPRNG("test_seed"))
        sites2 = generate_sites(10, 50, 50, AleaPRNG("test_seed"))

        np.testing.assert_array_equal(sites1, sites2)

    def test_different_seeds(self):
        """Different seeds produce different sites."""
        sites1 = generate_sites(10, 50, 50, AleaPRNG("seed1"))
        sites2 = generate_sites(10, 50, 50, AleaPRNG("seed2"))

        assert not np.array_equal(sites1, sites2)

    @pytest.mark.parametrize("count", [0, -3])
    def test_invalid_count(self, count):
        """Fewer than one site is a contract violation."""
        with pytest.raises(ValueError):
            generate_sites(count, 10, 10, AleaPRNG("bad"))

    def test_invalid_dimensions(self):
        """Non-positive dimensions are rejected."""
        with pytest.raises(ValueError):
            generate_sites(5, 0, 10, AleaPRNG("bad"))


class TestDeriveSiteCount:
    """Test plate count derivation."""

    def test_standard_area_without_jitter(self):
        """A standard sized map gets the base count when jitter is off."""
        count = derive_site_count(84, 54, AleaPRNG("count"), base_count=18, jitter=0.0)

        assert count == 18

    def test_scales_with_area(self):
        """Larger maps get more plates."""
        small = derive_site_count(52, 34, AleaPRNG("count"), jitter=0.0)
        large = derive_site_count(128, 80, AleaPRNG("count"), jitter=0.0)

        assert small < 18 < large

    def test_jitter_range(self):
        """Jitter adds between 0 and ``jitter`` plates."""
        for seed in range(20):
            count = derive_site_count(84, 54, AleaPRNG(seed), base_count=18, jitter=6.0)
            assert 18 <= count <= 23

    def test_single_draw(self):
        """Derivation consumes exactly one draw."""
        prng = AleaPRNG("count")
        derive_site_count(84, 54, prng)

        assert prng.call_count == 1

    def test_minimum_one(self):
        """Tiny maps still get a plate."""
        assert derive_site_count(1, 1, AleaPRNG("tiny"), base_count=1, jitter=0.0) == 1
