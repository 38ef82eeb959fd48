# src/lightprop/viz/render.py
"""
matplotlib 渲染层：只读取 SimulationState / TickResult，不修改任何模拟状态。

画面元素：
  - 1 单位间隔的浅灰网格线
  - 黑色域边框
  - 蓝色探测器圆盘（灰色描边）
  - 红色光源方块
  - 黄色光子路径
  - 散射标记：沿散射前方向的 0.5 长绿色短线
  - 吸收标记：红色方块
"""
import math
from typing import Iterable, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle
from matplotlib.collections import LineCollection, PatchCollection

from ..models.domain import Domain
from ..mc.photon_types import EventKind
from ..simulation.errors import ConfigError

MARKER_HALF = 0.25
SCATTER_MARK_LEN = 0.5


def fit_view_bounds(pixel_w: int, pixel_h: int, domain: Domain,
                    padding: float = 3.0) -> Tuple[float, float, float, float]:
    """
    窗口尺寸变化时保持纵横比：较窄的一轴两侧对称加宽。
    返回 (x_min, x_max, y_min, y_max)。
    """
    if pixel_w <= 0 or pixel_h <= 0:
        raise ConfigError(f"viewport must be positive, got {pixel_w}x{pixel_h}")
    x_min, x_max, y_min, y_max = domain.padded_bounds(padding)
    world_w, world_h = x_max - x_min, y_max - y_min
    aspect = pixel_w / pixel_h

    if aspect > world_w / world_h:
        extra = (world_h * aspect - world_w) / 2.0
        return x_min - extra, x_max + extra, y_min, y_max
    extra = (world_w / aspect - world_h) / 2.0
    return x_min, x_max, y_min - extra, y_max + extra


def draw_scene(ax, state, pixel_size=(800, 1056)):
    """绘制静态场景（网格、边框、探测器、光源）"""
    domain = state.domain
    x0, x1, y0, y1 = fit_view_bounds(pixel_size[0], pixel_size[1], domain, state.cfg.padding)
    ax.set_xlim(x0, x1)
    ax.set_ylim(y0, y1)
    ax.set_aspect("equal")
    ax.set_facecolor((0.8, 0.8, 0.8))

    W, H = domain.width, domain.height
    grid_lines = [[(i, 0.0), (i, H)] for i in range(int(math.floor(W)) + 1)]
    grid_lines += [[(0.0, j), (W, j)] for j in range(int(math.floor(H)) + 1)]
    ax.add_collection(LineCollection(grid_lines, colors=[(0.8, 0.8, 0.8, 0.5)], linewidths=1.0))

    ax.add_patch(Rectangle((0.0, 0.0), W, H, fill=False, edgecolor="black", linewidth=2.0))

    disks = [Circle((float(x), float(y)), state.grid.radius) for x, y in state.grid.centers]
    ax.add_collection(PatchCollection(disks, facecolor="blue", edgecolor=(0.6, 0.6, 0.6)))

    ex, ey = state.emitter
    ax.add_patch(_square(ex, ey, "red"))
    return ax


def draw_photons(ax, photons: Iterable):
    """所有光子路径，按相邻顶点连成线段"""
    segments = []
    for photon in photons:
        path = photon.path
        if len(path) < 2:
            continue
        segments.extend([path[i], path[i + 1]] for i in range(len(path) - 1))
    if segments:
        ax.add_collection(LineCollection(segments, colors=[(0.7, 0.7, 0.1)], linewidths=2.0))
    return ax


def draw_events(ax, ticks: Iterable):
    """散射画方向短线，终止事件画方块，EMIT 不画"""
    for t in ticks:
        x, y = t.point
        if t.event is EventKind.SCATTER:
            ax.plot([x, x + SCATTER_MARK_LEN * math.cos(t.angle)],
                    [y, y + SCATTER_MARK_LEN * math.sin(t.angle)],
                    color="green", linewidth=2.0)
        elif t.terminal:
            ax.add_patch(_square(x, y, "red"))
    return ax


def render(state, ticks=(), pixel_size=(800, 1056), ax=None):
    if ax is None:
        fig, ax = plt.subplots(figsize=(pixel_size[0] / 100, pixel_size[1] / 100))
    draw_scene(ax, state, pixel_size)
    draw_photons(ax, state.photons)
    draw_events(ax, ticks)
    ax.set_title("Sensor Alignment")
    return ax.figure


def _square(x, y, color):
    return Rectangle((x - MARKER_HALF, y - MARKER_HALF), 2 * MARKER_HALF, 2 * MARKER_HALF,
                     facecolor=color, edgecolor="none")
