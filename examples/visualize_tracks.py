# examples/visualize_tracks.py
import numpy as np
import matplotlib.pyplot as plt

from lightprop.simulation.state import SimConfig, SimulationState
from lightprop.simulation.driver import step, run_photons
from lightprop.viz.render import render


def plot_statistics(state):
    """步长分布 + 探测器命中热图"""
    fig, axes = plt.subplots(1, 2, figsize=(11, 5))

    ax = axes[0]
    s = np.asarray(state.tallies.sampled_steps, dtype=float)
    ax.hist(s, bins=60, density=True, alpha=0.6, label="sampled")
    mu_t = state.props.mu_t
    xs = np.linspace(0.0, np.percentile(s, 99.5), 300)
    ax.plot(xs, mu_t * np.exp(-mu_t * xs), lw=2, label=r"theory Exp($\mu_t$)")
    ax.set_xlabel("step s"); ax.set_ylabel("pdf")
    ax.set_title("Step length distribution"); ax.legend()

    ax = axes[1]
    im = ax.imshow(state.tallies.sensor_hits, origin="lower", cmap="viridis")
    fig.colorbar(im, ax=ax, label="hits")
    ax.set_xlabel("column"); ax.set_ylabel("row")
    ax.set_title("Sensor hits")

    plt.tight_layout()
    return fig


if __name__ == "__main__":
    # 少量光子画轨迹
    state = SimulationState.from_config(SimConfig(rng_seed=42, history_limit=30))
    ticks = [step(state) for _ in range(200)]
    render(state, ticks)

    # 大量光子做统计
    stats = SimulationState.from_config(SimConfig(rng_seed=7))
    run_photons(stats, 20000, progress=True)
    plot_statistics(stats)
    plt.show()
