# tests/test_sampling.py
import math
import numpy as np
import pytest

from lightprop.models.medium import MediumProps
from lightprop.mc.kernels_cpu import sample_step, sample_direction, StepSample


class _ConstRng:
    """每次 random() 都返回同一个值"""
    def __init__(self, u):
        self.u = u

    def random(self):
        return self.u


def test_free_path_means_converge():
    """d_scatter 均值 ≈ 7，d_absorb 均值 ≈ 11"""
    rng = np.random.default_rng(0)
    props = MediumProps(mean_free_path=7.0, absorption_length=11.0)
    M = 100000
    samples = [sample_step(rng, props) for _ in range(M)]
    d_s = np.array([s.d_scatter for s in samples])
    d_a = np.array([s.d_absorb for s in samples])
    dist = np.array([s.distance for s in samples])
    absorbed = np.array([s.absorbed for s in samples])

    assert np.isclose(d_s.mean(), 7.0, rtol=0.02)
    assert np.isclose(d_a.mean(), 11.0, rtol=0.02)
    # min 仍服从指数分布，均值 1/mu_t
    assert np.isclose(dist.mean(), 1.0 / props.mu_t, rtol=0.02)
    # 吸收先于散射的概率 = mu_a / mu_t = 7/18
    assert abs(absorbed.mean() - props.mu_a / props.mu_t) < 0.01


def test_distance_is_min_of_both():
    rng = np.random.default_rng(3)
    props = MediumProps()
    for _ in range(1000):
        s = sample_step(rng, props)
        assert s.distance == min(s.d_scatter, s.d_absorb)
        assert s.absorbed == (s.distance == s.d_absorb)


def test_tie_resolves_to_absorption():
    # u=1 时两个自由程都为 0，平局按吸收处理
    s = sample_step(_ConstRng(1.0), MediumProps())
    assert s.d_scatter == s.d_absorb
    assert s.absorbed


def test_zero_uniform_does_not_fault():
    s = sample_step(_ConstRng(0.0), MediumProps())
    assert math.isfinite(s.d_scatter) and math.isfinite(s.d_absorb)
    assert s.d_scatter > 0.0


def test_classification_by_smaller_path():
    assert StepSample(2.0, 2.0, 5.0).absorbed is False
    assert StepSample(2.0, 5.0, 2.0).absorbed is True


def test_direction_uniform_range():
    rng = np.random.default_rng(1)
    angles = np.array([sample_direction(rng) for _ in range(50000)])
    assert angles.min() >= 0.0 and angles.max() < 2.0 * math.pi
    assert np.isclose(angles.mean(), math.pi, rtol=0.02)


def test_invalid_lengths():
    from lightprop.simulation.errors import ConfigError
    with pytest.raises(ConfigError):
        MediumProps(mean_free_path=0.0)
    with pytest.raises(ValueError):
        MediumProps(absorption_length=-1.0)
