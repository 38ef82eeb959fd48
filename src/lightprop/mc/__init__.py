# src/lightprop/mc/__init__.py
import warnings

from .kernels_cpu import (
    NO_HIT, NoHit, WallHit, SensorHit, StepSample,
    sample_step, sample_direction, check_walls, check_sensors, resolve_step,
)
from .photon_types import Photon, PhotonState, EventKind


def simulate_photons(*args, **kwargs):
    warnings.warn(
        "lightprop.mc.simulate_photons is deprecated; "
        "use lightprop.simulation.driver.run_photons instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    from ..simulation.driver import run_photons as _f
    return _f(*args, **kwargs)
