"""Tests for coherent noise fields."""

import numpy as np
import pytest

from pcgbg.noise_field import NoiseField, sample_noise_field


class TestNoiseField:
    def test_scalar_sample(self):
        value = NoiseField(seed=3, scale=0.05).sample(4.0, 9.0)
        assert isinstance(value, float)
        assert -1.0 <= value <= 1.0

    def test_array_sample_shape(self):
        xs, ys = np.meshgrid(np.arange(6.0), np.arange(4.0), indexing="ij")
        vals = NoiseField(seed=3, scale=0.1).sample(xs, ys)
        assert vals.shape == (6, 4)
        assert vals.dtype == np.float64

    def test_deterministic_with_seed(self):
        xs, ys = np.meshgrid(np.arange(8.0), np.arange(8.0), indexing="ij")
        r1 = NoiseField(seed=42, scale=0.3).sample(xs, ys)
        r2 = NoiseField(seed=42, scale=0.3).sample(xs, ys)
        np.testing.assert_array_equal(r1, r2)

    def test_seed_changes_output(self):
        xs, ys = np.meshgrid(np.arange(8.0), np.arange(8.0), indexing="ij")
        r1 = NoiseField(seed=1, scale=0.3).sample(xs, ys)
        r2 = NoiseField(seed=2, scale=0.3).sample(xs, ys)
        assert not np.allclose(r1, r2)

    def test_scale_applies_to_both_axes(self):
        coarse = NoiseField(seed=9, scale=0.5)
        fine = NoiseField(seed=9, scale=0.25)
        assert coarse.sample(3.0, 5.0) == pytest.approx(fine.sample(6.0, 10.0))

    def test_varies_over_grid(self):
        xs, ys = np.meshgrid(np.arange(10.0), np.arange(10.0), indexing="ij")
        vals = NoiseField(seed=7, scale=0.5).sample(xs, ys)
        assert vals.max() > vals.min()


class TestSampleNoiseField:
    def test_seed_drawn_from_rng(self):
        a = sample_noise_field(np.random.default_rng(12), scale=0.2)
        b = sample_noise_field(np.random.default_rng(12), scale=0.2)
        assert a == b
        assert a.scale == 0.2

    def test_successive_draws_differ(self, rng):
        a = sample_noise_field(rng, scale=0.2)
        b = sample_noise_field(rng, scale=0.2)
        assert a.seed != b.seed

    def test_passes_options(self, rng):
        field = sample_noise_field(rng, scale=0.1, persistence=0.25, octaves=3)
        assert field.persistence == 0.25
        assert field.octaves == 3
