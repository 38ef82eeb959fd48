# src/lightprop/models/domain.py
from dataclasses import dataclass
from typing import Tuple

from ..simulation.errors import ConfigError


@dataclass(frozen=True)
class Domain:
    """二维矩形介质 [0, width] × [0, height]，运行期间不可变"""
    width: float = 25.0
    height: float = 33.0

    def __post_init__(self):
        if not (self.width > 0.0 and self.height > 0.0):
            raise ConfigError(
                f"domain extent must be positive, got {self.width}x{self.height}"
            )

    def contains(self, x: float, y: float) -> bool:
        """闭区间判定，边界上的点也算在域内"""
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height

    def padded_bounds(self, padding: float) -> Tuple[float, float, float, float]:
        """返回带留白的可视区域 (x_min, x_max, y_min, y_max)"""
        if padding < 0.0:
            raise ConfigError(f"padding must be >= 0, got {padding}")
        return (-padding, self.width + padding, -padding, self.height + padding)
