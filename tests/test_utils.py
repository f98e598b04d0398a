import json

import numpy as np
import pytest

from life_sim import GameOptions, utils


def test_load_params_json(tmp_path):
    path = tmp_path / "opts.json"
    path.write_text(json.dumps({"xCells": 30, "density": 0.2}))
    opts = GameOptions.from_mapping(utils.load_params(path))
    assert opts.dims == (30, 75, 75)
    assert opts.density == 0.2


def test_load_params_toml(tmp_path):
    path = tmp_path / "opts.toml"
    path.write_text("x_cells = 40\ny_cells = 40\nz_cells = 1\n")
    opts = GameOptions.from_mapping(utils.load_params(path))
    assert opts.dims == (40, 40, 1)


def test_load_params_rejects_unknown_format(tmp_path):
    path = tmp_path / "opts.yaml"
    path.write_text("x_cells: 3\n")
    with pytest.raises(ValueError):
        utils.load_params(path)


def test_string_density_from_config_is_rejected(tmp_path):
    """A quoted density in a config file fails validation with ValueError."""
    path = tmp_path / "opts.json"
    path.write_text(json.dumps({"density": "0.2"}))
    opts = GameOptions.from_mapping(utils.load_params(path))
    with pytest.raises(ValueError):
        opts.validate()


def test_set_seed_reproducible():
    utils.set_seed(3)
    a = np.random.random(4)
    utils.set_seed(3)
    np.testing.assert_array_equal(a, np.random.random(4))
