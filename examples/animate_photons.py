# examples/animate_photons.py
"""逐帧动画：模拟步进由 TickClock 按固定步长驱动，与刷新率解耦"""
import time
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from lightprop.simulation.state import SimConfig, SimulationState
from lightprop.simulation.driver import TickClock, advance_frame
from lightprop.viz.render import render

PIXELS = (800, 1056)


def main():
    cfg = SimConfig(rng_seed=None, history_limit=50, tick_dt=1.0 / 30.0)
    state = SimulationState.from_config(cfg)
    clock = TickClock(cfg.tick_dt, cfg.max_ticks_per_frame)
    fig, ax = plt.subplots(figsize=(PIXELS[0] / 100, PIXELS[1] / 100))
    last = [time.perf_counter()]
    recent = []

    def update(_frame):
        now = time.perf_counter()
        recent.extend(advance_frame(state, clock, now - last[0]))
        last[0] = now
        del recent[:-100]
        ax.clear()
        render(state, recent, PIXELS, ax=ax)
        return []

    # 必须持有引用，否则动画会被回收
    anim = FuncAnimation(fig, update, interval=16, cache_frame_data=False)
    plt.show()
    return anim


if __name__ == "__main__":
    main()
