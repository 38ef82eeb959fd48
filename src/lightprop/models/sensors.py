# src/lightprop/models/sensors.py
import numpy as np
from typing import Tuple

from .domain import Domain
from ..simulation.errors import ConfigError


class SensorGrid:
    """N×N 圆形探测器网格，所有探测器共用同一半径 r。

    中心点从域边界内缩 margin 后均匀排布，按行优先顺序编号：
    index = row * n + col，row 对应 y 方向，col 对应 x 方向。
    初始化后中心点数组只读。
    """

    def __init__(self, centers, radius: float, n_per_axis: int = 0):
        centers = np.array(centers, dtype=float).reshape(-1, 2)
        if radius <= 0.0:
            raise ConfigError(f"sensor radius must be > 0, got {radius}")
        if len(centers) == 0:
            raise ConfigError("sensor grid must contain at least one sensor")
        # 中心点两两不同
        if len(np.unique(centers, axis=0)) != len(centers):
            raise ConfigError("sensor centers must be pairwise distinct")

        centers.setflags(write=False)
        self.centers = centers
        self.radius = float(radius)
        self.n_per_axis = int(n_per_axis)

    @classmethod
    def regular(cls, domain: Domain, n: int = 10, radius: float = 0.075,
                margin: float = 0.5) -> "SensorGrid":
        """按域尺寸生成 n×n 网格"""
        if n < 2:
            raise ConfigError(f"sensor grid needs n >= 2 per axis, got {n}")
        if margin < 0.0 or 2.0 * margin >= min(domain.width, domain.height):
            raise ConfigError(
                f"sensor margin {margin} does not fit a {domain.width}x{domain.height} domain"
            )

        spacing_x = (domain.width - 2.0 * margin) / (n - 1)
        spacing_y = (domain.height - 2.0 * margin) / (n - 1)
        centers = []
        for i in range(n):          # 行：y
            for j in range(n):      # 列：x
                centers.append((margin + j * spacing_x, margin + i * spacing_y))
        return cls(centers, radius, n_per_axis=n)

    @classmethod
    def from_centers(cls, centers, radius: float) -> "SensorGrid":
        """任意中心点列表（例如单个探测器的测试场景），按给定顺序编号"""
        return cls(centers, radius, n_per_axis=0)

    def __len__(self):
        return len(self.centers)

    def center(self, index: int) -> Tuple[float, float]:
        x, y = self.centers[index]
        return float(x), float(y)

    def grid_position(self, index: int) -> Tuple[int, int]:
        """index -> (row, col)；非规则网格时 row 恒为 0"""
        if not 0 <= index < len(self):
            raise IndexError(f"sensor index {index} out of range")
        if self.n_per_axis <= 0:
            return 0, int(index)
        return divmod(int(index), self.n_per_axis)

    def index_of(self, row: int, col: int) -> int:
        if self.n_per_axis <= 0:
            if row != 0:
                raise IndexError("irregular sensor set has a single row")
            return int(col)
        if not (0 <= row < self.n_per_axis and 0 <= col < self.n_per_axis):
            raise IndexError(f"grid position ({row}, {col}) out of range")
        return row * self.n_per_axis + col

    def shape(self) -> Tuple[int, int]:
        if self.n_per_axis <= 0:
            return 1, len(self)
        return self.n_per_axis, self.n_per_axis
