# src/lightprop/simulation/driver.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import logging

from tqdm import tqdm

from ..mc.photon_types import EventKind, Photon, Point
from ..mc.kernels_cpu import (
    SensorHit, WallHit,
    resolve_step, sample_direction, sample_step, tentative_endpoint,
)
from .errors import ConfigError, SimulationError
from .state import SimulationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickResult:
    """一次 tick 的输出，供渲染层消费"""
    event: EventKind
    point: Point
    angle: float                      # 事件发生时的方向（散射前的旧方向）
    serial: int
    sensor_index: Optional[int] = None

    @property
    def terminal(self) -> bool:
        return self.event in (EventKind.WALL, EventKind.SENSOR, EventKind.BULK)


def emit_photon(state: SimulationState) -> Photon:
    """在光源处发射新光子，方向均匀随机"""
    x, y = state.emitter
    photon = Photon(x, y, sample_direction(state.rng), serial=state.emitted)
    state.emitted += 1
    state.photons.append(photon)

    limit = state.cfg.history_limit
    if limit is not None and len(state.photons) > limit:
        # 只丢弃已终止的历史光子
        del state.photons[:len(state.photons) - limit]
    return photon


def step(state: SimulationState) -> TickResult:
    """
    推进一个 tick：
    - 当前没有活跃光子 → 发射新光子（本 tick 只做这一件事）
    - 否则：采样候选步 → 墙面 → 探测器 → 体事件
    """
    state.ticks += 1
    photon = state.active_photon
    if photon is None:
        photon = emit_photon(state)
        return TickResult(EventKind.EMIT, photon.position, photon.angle, photon.serial)

    cfg = state.cfg
    p0 = photon.position
    sample = sample_step(state.rng, state.props)
    p1 = tentative_endpoint(p0, photon.angle, sample.distance)
    state.tallies.log_step(sample.distance)

    outcome = resolve_step(p0, p1, state.domain, state.grid,
                           nearest_wall=cfg.nearest_wall,
                           snap_to_center=cfg.snap_to_center)

    angle = photon.angle
    if isinstance(outcome, WallHit):
        return _finish(state, photon, outcome.point, EventKind.WALL)
    if isinstance(outcome, SensorHit):
        return _finish(state, photon, outcome.point, EventKind.SENSOR, outcome.index)
    if sample.absorbed:
        return _finish(state, photon, p1, EventKind.BULK)

    # 散射：接受候选点，下一 tick 使用新方向
    photon.advance(p1)
    photon.angle = sample_direction(state.rng)
    state.tallies.add_scatter()
    return TickResult(EventKind.SCATTER, p1, angle, photon.serial)


def _finish(state: SimulationState, photon: Photon, point: Point,
            event: EventKind, sensor_index: Optional[int] = None) -> TickResult:
    photon.terminate(point, event, sensor_index)
    grid_pos = state.grid.grid_position(sensor_index) if sensor_index is not None else None
    state.tallies.add_terminal(event, grid_pos)
    state.tallies.add_track(photon.path)
    logger.debug("photon #%d %s at (%.3f, %.3f) after %d vertices%s",
                 photon.serial, event.value, point[0], point[1], len(photon.path),
                 f", sensor {sensor_index} {grid_pos}" if sensor_index is not None else "")
    return TickResult(event, photon.position, photon.angle, photon.serial, sensor_index)


def run_photons(state: SimulationState, n_photons: int, progress: bool = False) -> List[Photon]:
    """
    依次模拟 n_photons 个光子直到全部终止，返回这些光子。
    每个光子最多 cfg.max_ticks 个 tick，超过则抛 SimulationError。
    """
    done = []
    for _ in tqdm(range(n_photons), disable=not progress, desc="photons"):
        # 若上一次运行留下了活跃光子，先把它跑完；否则发射也占用一个 tick
        if state.active_photon is None:
            step(state)
        photon = state.current
        ticks = 0
        while photon.active:
            if ticks >= state.cfg.max_ticks:
                raise SimulationError(
                    f"photon #{photon.serial} still active after {ticks} ticks"
                )
            step(state)
            ticks += 1
        done.append(photon)

    wall, sensor, bulk = state.tallies.results()
    logger.info("%d photons: wall=%.3f sensor=%.3f bulk=%.3f",
                state.tallies.N, wall, sensor, bulk)
    return done


class TickClock:
    """固定步长累加器：把渲染帧间隔 dt 换算成本帧要跑的 tick 数"""

    def __init__(self, tick_dt: float = 1.0 / 60.0, max_ticks_per_frame: int = 8):
        if tick_dt <= 0.0 or max_ticks_per_frame < 1:
            raise ConfigError("tick_dt must be > 0 and max_ticks_per_frame >= 1")
        self.tick_dt = float(tick_dt)
        self.max_ticks_per_frame = int(max_ticks_per_frame)
        self._acc = 0.0

    def advance(self, dt: float) -> int:
        if dt < 0.0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self._acc += dt
        n = int(self._acc // self.tick_dt)
        if n > self.max_ticks_per_frame:
            # 落后太多时丢弃积压，避免越跑越慢
            n = self.max_ticks_per_frame
            self._acc %= self.tick_dt
        else:
            self._acc -= n * self.tick_dt
        return n


def advance_frame(state: SimulationState, clock: TickClock, dt: float) -> List[TickResult]:
    """一帧内按 clock 跑若干 tick，顺序与逐 tick 调用完全相同"""
    return [step(state) for _ in range(clock.advance(dt))]
