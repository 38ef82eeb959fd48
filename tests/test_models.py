import numpy as np
import pytest

from lightprop.models.domain import Domain
from lightprop.models.sensors import SensorGrid
from lightprop.simulation.state import SimConfig, SimulationState
from lightprop.simulation.errors import ConfigError


def test_regular_grid_layout():
    grid = SensorGrid.regular(Domain(25.0, 33.0), n=10, radius=0.075, margin=0.5)
    assert len(grid) == 100
    assert grid.shape() == (10, 10)
    assert grid.center(0) == pytest.approx((0.5, 0.5))
    # 行优先：index 9 是第 0 行最后一列（x 方向）
    assert grid.center(9) == pytest.approx((24.5, 0.5))
    assert grid.center(99) == pytest.approx((24.5, 32.5))
    assert grid.grid_position(13) == (1, 3)
    assert grid.index_of(1, 3) == 13
    assert len(np.unique(grid.centers, axis=0)) == 100


def test_grid_centers_read_only():
    grid = SensorGrid.regular(Domain())
    with pytest.raises(ValueError):
        grid.centers[0, 0] = 1.0


@pytest.mark.parametrize("kwargs", [
    dict(n=1),
    dict(radius=0.0),
    dict(radius=-0.1),
    dict(margin=-1.0),
    dict(margin=20.0),
])
def test_invalid_grid(kwargs):
    with pytest.raises(ConfigError):
        SensorGrid.regular(Domain(25.0, 33.0), **kwargs)


def test_duplicate_centers_rejected():
    with pytest.raises(ConfigError):
        SensorGrid.from_centers([(1.0, 1.0), (1.0, 1.0)], 0.5)


def test_grid_index_bounds():
    grid = SensorGrid.regular(Domain(), n=3)
    with pytest.raises(IndexError):
        grid.grid_position(9)
    with pytest.raises(IndexError):
        grid.index_of(3, 0)


@pytest.mark.parametrize("w, h", [(0.0, 33.0), (25.0, -1.0)])
def test_invalid_domain(w, h):
    with pytest.raises(ConfigError):
        Domain(w, h)


def test_domain_contains_and_padding():
    dom = Domain(25.0, 33.0)
    assert dom.contains(0.0, 0.0) and dom.contains(25.0, 33.0)
    assert not dom.contains(25.01, 1.0)
    assert dom.padded_bounds(3.0) == (-3.0, 28.0, -3.0, 36.0)


def test_config_defaults_are_reference_instance():
    cfg = SimConfig().validate()
    state = SimulationState.from_config(cfg)
    assert (state.domain.width, state.domain.height) == (25.0, 33.0)
    assert state.props.mean_free_path == 7.0
    assert state.props.absorption_length == 11.0
    assert len(state.grid) == 100
    assert state.emitter == (12.0, 17.0)
    assert state.tallies.sensor_hits.shape == (10, 10)


@pytest.mark.parametrize("overrides", [
    dict(sensor_radius=0.0),
    dict(width=0.0),
    dict(n_sensors=1),
    dict(emitter_x=30.0),
    dict(mean_free_path=0.0),
    dict(padding=-1.0),
    dict(history_limit=0),
    dict(tick_dt=0.0),
])
def test_config_errors(overrides):
    with pytest.raises(ConfigError):
        SimConfig(**overrides).validate()


def test_config_from_dict():
    cfg = SimConfig.from_dict({"width": 10.0, "height": 12.0, "emitter_x": 5.0,
                               "emitter_y": 6.0, "rng_seed": 9})
    assert cfg.width == 10.0 and cfg.rng_seed == 9
    with pytest.raises(ConfigError, match="unknown config keys"):
        SimConfig.from_dict({"widht": 10.0})


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
