# src/lightprop/simulation/state.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import List, Optional
import numpy as np

from ..models.domain import Domain
from ..models.medium import MediumProps
from ..models.sensors import SensorGrid
from ..mc.photon_types import Photon
from ..mc.tallies import Tallies
from .errors import ConfigError


@dataclass
class SimConfig:
    # 域
    width: float = 25.0
    height: float = 33.0
    padding: float = 3.0
    # 探测器网格
    n_sensors: int = 10
    sensor_radius: float = 0.075
    sensor_margin: float = 0.5
    # 光源
    emitter_x: float = 12.0
    emitter_y: float = 17.0
    # 介质
    mean_free_path: float = 7.0
    absorption_length: float = 11.0
    # 运行
    rng_seed: Optional[int] = 1234
    max_ticks: int = 10_000
    history_limit: Optional[int] = None
    tick_dt: float = 1.0 / 60.0
    max_ticks_per_frame: int = 8
    # 几何策略：默认保持“按检查顺序的第一面墙”和“记录探测器中心”
    nearest_wall: bool = False
    snap_to_center: bool = True
    track_trajectories: bool = False
    max_tracks: int = 100

    @classmethod
    def from_dict(cls, data) -> "SimConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        cfg = cls(**dict(data))
        cfg.validate()
        return cfg

    def validate(self) -> "SimConfig":
        """初始化阶段检查；运行中不再恢复"""
        if not (self.width > 0.0 and self.height > 0.0):
            raise ConfigError(f"domain extent must be positive, got {self.width}x{self.height}")
        if self.sensor_radius <= 0.0:
            raise ConfigError(f"sensor_radius must be > 0, got {self.sensor_radius}")
        if self.n_sensors < 2:
            raise ConfigError(f"n_sensors must be >= 2, got {self.n_sensors}")
        if self.sensor_margin < 0.0 or 2.0 * self.sensor_margin >= min(self.width, self.height):
            raise ConfigError(f"sensor_margin {self.sensor_margin} does not fit the domain")
        if not (self.mean_free_path > 0.0 and self.absorption_length > 0.0):
            raise ConfigError("mean_free_path and absorption_length must be > 0")
        if not (0.0 <= self.emitter_x <= self.width and 0.0 <= self.emitter_y <= self.height):
            raise ConfigError(
                f"emitter ({self.emitter_x}, {self.emitter_y}) lies outside the domain"
            )
        if self.padding < 0.0:
            raise ConfigError(f"padding must be >= 0, got {self.padding}")
        if self.max_ticks < 1:
            raise ConfigError(f"max_ticks must be >= 1, got {self.max_ticks}")
        if self.history_limit is not None and self.history_limit < 1:
            raise ConfigError(f"history_limit must be >= 1, got {self.history_limit}")
        if self.tick_dt <= 0.0 or self.max_ticks_per_frame < 1:
            raise ConfigError("tick_dt must be > 0 and max_ticks_per_frame >= 1")
        return self


@dataclass
class SimulationState:
    """驱动循环持有的全部可变状态，不使用模块级全局变量"""
    cfg: SimConfig
    domain: Domain
    props: MediumProps
    grid: SensorGrid
    rng: np.random.Generator
    tallies: Tallies
    photons: List[Photon] = field(default_factory=list)
    ticks: int = 0
    emitted: int = 0

    @classmethod
    def from_config(cls, cfg: SimConfig, grid: Optional[SensorGrid] = None) -> "SimulationState":
        """grid 不传时按 cfg 生成规则网格"""
        cfg.validate()
        domain = Domain(cfg.width, cfg.height)
        if grid is None:
            grid = SensorGrid.regular(domain, cfg.n_sensors, cfg.sensor_radius, cfg.sensor_margin)
        return cls(
            cfg=cfg,
            domain=domain,
            props=MediumProps(cfg.mean_free_path, cfg.absorption_length),
            grid=grid,
            rng=np.random.default_rng(cfg.rng_seed),
            tallies=Tallies(grid_shape=grid.shape(),
                            track_trajectories=cfg.track_trajectories,
                            max_tracks=cfg.max_tracks),
        )

    @property
    def emitter(self):
        return float(self.cfg.emitter_x), float(self.cfg.emitter_y)

    @property
    def current(self) -> Optional[Photon]:
        return self.photons[-1] if self.photons else None

    @property
    def active_photon(self) -> Optional[Photon]:
        p = self.current
        return p if p is not None and p.active else None
