from .._trajectory import AccelerationSource
from ._accelerometer import (
    AccelerometerComponents,
    gravity_coriolis_body,
    simulate_accelerometer,
    true_specific_force,
)

__all__ = [
    "AccelerationSource",
    "AccelerometerComponents",
    "gravity_coriolis_body",
    "simulate_accelerometer",
    "true_specific_force",
]
