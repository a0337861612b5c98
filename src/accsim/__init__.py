from . import constants, noise, simulate
from ._earth import (
    coriolis_ned,
    earth_rate_ned,
    gravity,
    gravity_ned,
    radii,
    transport_rate_ned,
)
from ._profile import AccelerometerProfile
from ._trajectory import AccelerationSource, ReferenceTrajectory
from ._transforms import (
    dcm_from_euler,
    flatten_dcm,
    llh2ecef,
    nav2body,
    unflatten_dcm,
)
from .simulate import simulate_accelerometer

__all__ = [
    "AccelerationSource",
    "AccelerometerProfile",
    "ReferenceTrajectory",
    "constants",
    "coriolis_ned",
    "dcm_from_euler",
    "earth_rate_ned",
    "flatten_dcm",
    "gravity",
    "gravity_ned",
    "llh2ecef",
    "nav2body",
    "noise",
    "radii",
    "simulate",
    "simulate_accelerometer",
    "transport_rate_ned",
    "unflatten_dcm",
]
