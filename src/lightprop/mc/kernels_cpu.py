import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..models.domain import Domain
from ..models.medium import MediumProps
from ..models.sensors import SensorGrid
from .photon_types import Point


# --- 几何判定结果：带标签的变体，替代 -1/-2 这类哨兵值 ---

@dataclass(frozen=True)
class NoHit:
    def __bool__(self):
        return False


@dataclass(frozen=True)
class WallHit:
    point: Point


@dataclass(frozen=True)
class SensorHit:
    point: Point
    index: int


Outcome = Union[NoHit, WallHit, SensorHit]
NO_HIT = NoHit()


@dataclass(frozen=True)
class StepSample:
    """一次 tick 的候选步长"""
    distance: float
    d_scatter: float
    d_absorb: float

    @property
    def absorbed(self) -> bool:
        # 只用相等判断区分两种体事件；平局归为吸收
        return self.distance == self.d_absorb


# --- 采样 ---

def _sample_free_path(rng, rate: float) -> float:
    """指数分布自由程 s = -ln(ξ)/rate"""
    return -math.log(max(1e-12, float(rng.random()))) / rate


def sample_direction(rng) -> float:
    """均匀方向角 [0, 2π)，只在发射和散射后调用"""
    return 2.0 * math.pi * float(rng.random())


def sample_step(rng, props: MediumProps) -> StepSample:
    """
    每个 tick 独立抽两个指数变量：
      d_scatter ~ Exp(1/mean_free_path)
      d_absorb  ~ Exp(1/absorption_length)
    候选步长取二者较小值。不做任何边界/探测器裁剪。
    """
    d_scatter = _sample_free_path(rng, props.mu_s)
    d_absorb = _sample_free_path(rng, props.mu_a)
    return StepSample(min(d_scatter, d_absorb), d_scatter, d_absorb)


def tentative_endpoint(p0: Point, angle: float, distance: float) -> Point:
    return (p0[0] + distance * math.cos(angle), p0[1] + distance * math.sin(angle))


# --- 墙面判定 ---

def _axis_crossing(p0: Point, p1: Point, axis: int, boundary: float,
                   lo: float, hi: float) -> Optional[Tuple[float, Point]]:
    """
    线段与直线 (axis 分量 == boundary) 的交点。
    轴向增量为 0 时视为该轴不相交，不做除法。
    交点的另一分量必须落在 [lo, hi]（墙的有限长度）内。
    """
    delta = p1[axis] - p0[axis]
    if delta == 0.0:
        return None
    t = (boundary - p0[axis]) / delta
    if not 0.0 <= t <= 1.0:
        return None

    other = 1 - axis
    other_val = p0[other] + t * (p1[other] - p0[other])
    if not lo <= other_val <= hi:
        return None

    point = (boundary, other_val) if axis == 0 else (other_val, boundary)
    return t, point


def check_walls(p0: Point, p1: Point, domain: Domain, nearest: bool = False) -> Outcome:
    """
    判定线段 p0->p1 是否穿出域边界。

    只检查 p1 违反的半平面，顺序固定为 左、右、下、上。
    nearest=False（默认）时返回按此顺序找到的第一个交点；
    nearest=True 时返回 t 最小的交点（物理上最先到达的那面墙）。
    """
    W, H = domain.width, domain.height
    candidates = []

    if p1[0] < 0.0:
        candidates.append(_axis_crossing(p0, p1, 0, 0.0, 0.0, H))
    if p1[0] > W:
        candidates.append(_axis_crossing(p0, p1, 0, W, 0.0, H))
    if p1[1] < 0.0:
        candidates.append(_axis_crossing(p0, p1, 1, 0.0, 0.0, W))
    if p1[1] > H:
        candidates.append(_axis_crossing(p0, p1, 1, H, 0.0, W))

    hits = [c for c in candidates if c is not None]
    if not hits:
        return NO_HIT
    if nearest:
        # min 是稳定的：t 相同时保留检查顺序靠前的墙
        _, point = min(hits, key=lambda h: h[0])
    else:
        _, point = hits[0]
    return WallHit(point)


# --- 探测器判定 ---

def check_sensors(p0: Point, p1: Point, grid: SensorGrid, snap_to_center: bool = True) -> Outcome:
    """
    按行优先顺序逐个求解线段与圆的交点：
        P(t) = p0 + t*(p1-p0),  |P(t) - c|^2 = r^2
        a = |d|^2, b = 2 (p0-c)·d, c = |p0-c|^2 - r^2
    任一根落在 [0,1] 即命中，返回第一个命中的探测器。

    snap_to_center=True 时记录点为探测器中心；
    否则记录真实的入射点（起点已在圆内时为起点本身）。
    """
    x0, y0 = p0
    dx, dy = p1[0] - x0, p1[1] - y0
    a = dx * dx + dy * dy
    if a == 0.0:
        # 零长度线段
        return NO_HIT

    r2 = grid.radius * grid.radius
    for idx, (xc, yc) in enumerate(grid.centers):
        ox, oy = x0 - xc, y0 - yc
        b = 2.0 * (ox * dx + oy * dy)
        c = ox * ox + oy * oy - r2

        disc = b * b - 4.0 * a * c
        if disc < 0.0:
            continue

        sqrt_disc = math.sqrt(disc)
        t1 = (-b - sqrt_disc) / (2.0 * a)
        t2 = (-b + sqrt_disc) / (2.0 * a)
        t1_in = 0.0 <= t1 <= 1.0
        t2_in = 0.0 <= t2 <= 1.0
        if not (t1_in or t2_in):
            continue

        if snap_to_center:
            point = (float(xc), float(yc))
        else:
            t = t1 if t1_in else 0.0
            point = (x0 + t * dx, y0 + t * dy)
        return SensorHit(point, idx)

    return NO_HIT


def resolve_step(p0: Point, p1: Point, domain: Domain, grid: SensorGrid,
                 nearest_wall: bool = False, snap_to_center: bool = True) -> Outcome:
    """墙面优先，其次探测器；两者之间不比较距离"""
    wall = check_walls(p0, p1, domain, nearest=nearest_wall)
    if wall:
        return wall
    return check_sensors(p0, p1, grid, snap_to_center=snap_to_center)
