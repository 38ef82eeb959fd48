from dataclasses import dataclass

from ..simulation.errors import ConfigError


@dataclass
class MediumProps:
    mean_free_path: float = 7.0      # 散射平均自由程
    absorption_length: float = 11.0  # 吸收长度

    def __post_init__(self):
        if not (self.mean_free_path > 0.0 and self.absorption_length > 0.0):
            raise ConfigError(
                "mean_free_path and absorption_length must be > 0, got "
                f"{self.mean_free_path}, {self.absorption_length}"
            )

    @property
    def mu_s(self) -> float:
        return 1.0 / self.mean_free_path

    @property
    def mu_a(self) -> float:
        return 1.0 / self.absorption_length

    @property
    def mu_t(self) -> float:
        return self.mu_a + self.mu_s
