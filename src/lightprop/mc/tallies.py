import numpy as np

from .photon_types import EventKind


class Tallies:
    """终止事件计数 + 每个探测器的命中次数，可选记录步长和轨迹"""

    def __init__(self, grid_shape=(10, 10), track_trajectories=False, max_tracks=100,
                 max_steps_logged=100_000):
        self.wall = 0
        self.sensor = 0
        self.bulk = 0
        self.scatters = 0
        self.N = 0
        self.sensor_hits = np.zeros(grid_shape, dtype=np.int64)
        self.track_trajectories = track_trajectories
        self.max_tracks = max_tracks
        self.tracks = []  # 每条轨迹是 [(x,y), (x,y), ...]
        self.max_steps_logged = int(max_steps_logged)
        self.sampled_steps = []

    def log_step(self, s):
        if len(self.sampled_steps) < self.max_steps_logged:
            self.sampled_steps.append(float(s))

    def add_scatter(self): self.scatters += 1

    def add_terminal(self, event: EventKind, grid_pos=None):
        if event is EventKind.WALL:
            self.wall += 1
        elif event is EventKind.SENSOR:
            self.sensor += 1
            if grid_pos is not None:
                self.sensor_hits[grid_pos] += 1
        elif event is EventKind.BULK:
            self.bulk += 1
        else:
            raise ValueError(f"{event} is not a terminal event")
        self.N += 1

    def add_track(self, path):
        if self.track_trajectories and len(self.tracks) < self.max_tracks:
            self.tracks.append(list(path))

    def results(self):
        """返回 (wall, sensor, bulk) 三种终止方式的比例，和为 1"""
        n = max(self.N, 1)
        return self.wall / n, self.sensor / n, self.bulk / n
