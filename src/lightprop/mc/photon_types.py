from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..simulation.errors import PhotonStateError

Point = Tuple[float, float]


class PhotonState(Enum):
    EMITTED = "emitted"
    PROPAGATING = "propagating"
    ABSORBED_BULK = "absorbed_bulk"
    ABSORBED_WALL = "absorbed_wall"
    DETECTED = "detected"

    @property
    def terminal(self) -> bool:
        return self in (PhotonState.ABSORBED_BULK,
                        PhotonState.ABSORBED_WALL,
                        PhotonState.DETECTED)


class EventKind(Enum):
    """每个 tick 产生的事件；WALL/SENSOR/BULK 为终止事件"""
    EMIT = "emit"
    SCATTER = "scatter"
    WALL = "wall"
    SENSOR = "sensor"
    BULK = "bulk"


# 终止事件 -> 光子终态
TERMINAL_STATES = {
    EventKind.WALL: PhotonState.ABSORBED_WALL,
    EventKind.SENSOR: PhotonState.DETECTED,
    EventKind.BULK: PhotonState.ABSORBED_BULK,
}


@dataclass
class Photon:
    """单个光子：路径只追加，终止后不可再修改"""
    x0: float
    y0: float
    angle: float
    serial: int = 0
    path: List[Point] = field(default_factory=list)
    state: PhotonState = PhotonState.EMITTED
    sensor_index: Optional[int] = None

    def __post_init__(self):
        if not self.path:
            self.path.append((float(self.x0), float(self.y0)))

    @property
    def active(self) -> bool:
        return not self.state.terminal

    @property
    def position(self) -> Point:
        return self.path[-1]

    def advance(self, point: Point):
        """追加一个路径顶点，光子进入 PROPAGATING"""
        self._append(point)
        self.state = PhotonState.PROPAGATING

    def terminate(self, point: Point, event: EventKind, sensor_index: Optional[int] = None):
        if event not in TERMINAL_STATES:
            raise ValueError(f"{event} is not a terminal event")
        self._append(point)
        self.state = TERMINAL_STATES[event]
        self.sensor_index = sensor_index if event is EventKind.SENSOR else None

    def _append(self, point: Point):
        if not self.active:
            raise PhotonStateError(
                f"photon #{self.serial} is {self.state.value}; path is frozen"
            )
        self.path.append((float(point[0]), float(point[1])))
