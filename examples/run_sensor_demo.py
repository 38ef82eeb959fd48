# examples/run_sensor_demo.py
import logging

from lightprop.simulation.state import SimConfig, SimulationState
from lightprop.simulation.driver import run_photons

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    for nearest, snap in ((False, True), (True, False)):
        cfg = SimConfig(rng_seed=42, nearest_wall=nearest, snap_to_center=snap)
        state = SimulationState.from_config(cfg)
        run_photons(state, 20000, progress=True)
        wall, sensor, bulk = state.tallies.results()
        print(f"nearest_wall={nearest} snap_to_center={snap} -> "
              f"wall={wall:.3f}, sensor={sensor:.4f}, bulk={bulk:.3f}")
        print("hits per sensor row:", state.tallies.sensor_hits.sum(axis=1))
