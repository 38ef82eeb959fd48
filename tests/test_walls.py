# tests/test_walls.py
import numpy as np
import pytest

from lightprop.models.domain import Domain
from lightprop.mc.kernels_cpu import check_walls, NoHit, WallHit, NO_HIT


def _domain():
    return Domain(25.0, 33.0)


def test_exit_right_wall_midpoint():
    """(24,16)->(26,16)：t=0.5 处穿过 x=25"""
    out = check_walls((24.0, 16.0), (26.0, 16.0), _domain())
    assert isinstance(out, WallHit)
    assert out.point == pytest.approx((25.0, 16.0))


@pytest.mark.parametrize("p0, p1, expected", [
    ((1.0, 10.0), (-1.0, 12.0), (0.0, 11.0)),    # 左
    ((3.0, 2.0), (5.0, -2.0), (4.0, 0.0)),       # 下
    ((10.0, 32.0), (14.0, 34.0), (12.0, 33.0)),  # 上
])
def test_exit_each_wall(p0, p1, expected):
    out = check_walls(p0, p1, _domain())
    assert isinstance(out, WallHit)
    assert out.point == pytest.approx(expected)


def test_segments_inside_never_hit():
    """域内线段不应报告墙面命中"""
    rng = np.random.default_rng(0)
    dom = _domain()
    for _ in range(2000):
        x = rng.uniform(0.0, dom.width, size=2)
        y = rng.uniform(0.0, dom.height, size=2)
        assert check_walls((x[0], y[0]), (x[1], y[1]), dom) == NO_HIT


def test_endpoint_on_boundary_is_not_exit():
    # 终点恰好在边界上（闭区间）不算穿出
    assert not check_walls((20.0, 5.0), (25.0, 5.0), _domain())


def test_zero_length_segment():
    out = check_walls((5.0, 5.0), (5.0, 5.0), _domain())
    assert isinstance(out, NoHit)


def test_zero_axis_delta_is_skipped():
    """起点终点都在左墙外侧、x 增量为 0：不做除法，也不报告命中"""
    out = check_walls((-1.0, 5.0), (-1.0, 8.0), _domain())
    assert out == NO_HIT


def test_crossing_outside_edge_extent_rejected():
    # 直线 x=25 的交点 y=40 不在墙的有限长度内，且起点在上方之外
    out = check_walls((20.0, 40.0), (30.0, 40.0), _domain())
    assert out == NO_HIT


@pytest.mark.parametrize("nearest", [False, True])
def test_corner_exit(nearest):
    """恰好穿过角点：右墙和上墙都合法，两种策略都返回角点"""
    out = check_walls((24.0, 32.0), (26.0, 34.0), _domain(), nearest=nearest)
    assert isinstance(out, WallHit)
    assert out.point == pytest.approx((25.0, 33.0))


def test_repeated_calls_identical():
    dom = _domain()
    first = check_walls((24.0, 16.0), (26.0, 17.0), dom)
    for _ in range(5):
        assert check_walls((24.0, 16.0), (26.0, 17.0), dom) == first
