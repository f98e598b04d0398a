"""
Unit tests for lattice storage and random initialisation.
"""

import numpy as np
import pytest

from life_sim import Lattice, generate_field, utils


class FixedSource:
    """Uniform source that always returns the same value."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self, size):
        self.calls += 1
        return np.full(size, self.value)


def test_new_lattice_is_dead_uint8():
    lattice = Lattice(4, 5, 6)
    assert lattice.shape == (4, 5, 6)
    assert lattice.size == 120
    assert lattice.cells.dtype == np.uint8
    assert lattice.live_count() == 0


@pytest.mark.parametrize("dims", [(0, 5, 5), (5, -1, 5), (5, 5, 0), (2.5, 2, 2), (True, 2, 2)])
def test_invalid_dimensions_rejected(dims):
    with pytest.raises(ValueError):
        Lattice(*dims)


def test_get_set_roundtrip_and_layout():
    """Cells are stored C-ordered with z varying fastest."""
    lattice = Lattice(3, 4, 5)
    lattice.set(1, 2, 3, 1)
    assert lattice.get(1, 2, 3) == 1
    assert lattice.cells.ravel()[(1 * 4 + 2) * 5 + 3] == 1
    lattice.set(1, 2, 3, 0)
    assert lattice.get(1, 2, 3) == 0


@pytest.mark.parametrize("coords", [(3, 0, 0), (0, 4, 0), (0, 0, 5), (-1, 0, 0), (0, -1, 0)])
def test_out_of_range_access_fails(coords):
    """No clamping and no negative-index wraparound."""
    lattice = Lattice(3, 4, 5)
    with pytest.raises(IndexError):
        lattice.get(*coords)
    with pytest.raises(IndexError):
        lattice.set(*coords, 1)


def test_set_rejects_non_binary_values():
    lattice = Lattice(2, 2, 2)
    with pytest.raises(ValueError):
        lattice.set(0, 0, 0, 2)
    assert lattice.live_count() == 0


def test_view_is_read_only():
    lattice = Lattice(3, 3, 3)
    view = lattice.view()
    with pytest.raises(ValueError):
        view[1, 1, 1] = 1
    lattice.set(1, 1, 1, 1)
    assert view[1, 1, 1] == 1, "view must track the live buffer"


def test_from_array_validates_input():
    arr = np.zeros((3, 3, 1), dtype=int)
    arr[1, 1, 0] = 1
    lattice = Lattice.from_array(arr)
    assert lattice.is_planar
    assert lattice.get(1, 1, 0) == 1
    with pytest.raises(ValueError):
        Lattice.from_array(np.zeros((3, 3)))
    with pytest.raises(ValueError):
        Lattice.from_array(np.full((2, 2, 2), 3))


def test_copy_and_clear_are_independent():
    lattice = generate_field(4, 4, 4, 1.0)
    dup = lattice.copy()
    lattice.clear()
    assert lattice.live_count() == 0
    assert dup.live_count() == 64


def test_density_extremes():
    assert generate_field(50, 50, 1, 0).live_count() == 0
    assert generate_field(50, 50, 1, 1).live_count() == 2500


def test_default_density_is_empty():
    source = FixedSource(0.0)
    lattice = generate_field(6, 6, 6, rng=source)
    assert lattice.live_count() == 0
    assert source.calls == 0


def test_injected_source_threshold_is_strict():
    """A cell is alive only when its draw is strictly below the density."""
    assert generate_field(5, 5, 5, 0.5, rng=FixedSource(0.5)).live_count() == 0
    assert generate_field(5, 5, 5, 0.6, rng=FixedSource(0.5)).live_count() == 125


@pytest.mark.parametrize("density", [-0.1, 1.5, float("nan")])
def test_invalid_density_rejected(density):
    with pytest.raises(ValueError):
        generate_field(5, 5, 5, density)


def test_density_law_converges():
    """Mean live count over many trials approaches density * cells."""
    rng = np.random.default_rng(1234)
    density = 0.3
    counts = [generate_field(50, 50, 1, density, rng=rng).live_count() for _ in range(20)]
    expected = density * 2500
    assert abs(np.mean(counts) - expected) < 25
    assert all(abs(c - expected) < 150 for c in counts)


def test_global_seed_reproducible():
    utils.set_seed(7)
    a = generate_field(10, 10, 10, 0.4)
    utils.set_seed(7)
    b = generate_field(10, 10, 10, 0.4)
    np.testing.assert_array_equal(a.cells, b.cells)


def test_clear_boundary_keeps_interior():
    lattice = generate_field(5, 6, 7, 1.0)
    lattice.clear_boundary()
    assert lattice.live_count() == 3 * 4 * 5
    assert lattice.cells[1:-1, 1:-1, 1:-1].all()


def test_clear_boundary_planar_keeps_single_layer():
    lattice = generate_field(5, 5, 1, 1.0)
    lattice.clear_boundary()
    assert lattice.live_count() == 9
    assert lattice.cells[1:-1, 1:-1, 0].all()
