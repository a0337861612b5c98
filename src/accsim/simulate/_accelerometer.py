from typing import Callable, NamedTuple
from warnings import warn

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..constants import SGOLAY_ORDER, SGOLAY_WINDOW
from .._earth import coriolis_ned, gravity_ned
from .._profile import AccelerometerProfile
from .._trajectory import (
    AccelerationSource,
    ReferenceTrajectory,
    _check_window,
    _smooth,
)
from .._transforms import nav2body
from ..noise import bias_instability, fixed_bias, white_noise

GravityModel = Callable[[NDArray[np.float64], NDArray[np.float64]], NDArray[np.float64]]
CoriolisModel = Callable[
    [NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]], NDArray[np.float64]
]


class AccelerometerComponents(NamedTuple):
    """
    The terms that make up a simulated accelerometer signal, each with shape
    (n, 3) and expressed in the body frame.
    """

    true_accel: NDArray[np.float64]
    gravity: NDArray[np.float64]
    coriolis: NDArray[np.float64]
    white_noise: NDArray[np.float64]
    fixed_bias: NDArray[np.float64]
    bias_instability: NDArray[np.float64]

    def total(self) -> NDArray[np.float64]:
        """Combine the terms into the simulated measurement."""
        return (
            self.true_accel
            - self.coriolis
            + self.gravity
            + self.white_noise
            + self.fixed_bias
            + self.bias_instability
        )


def _acceleration_from_velocity(
    time: NDArray[np.float64],
    vel: NDArray[np.float64],
    window_length: int,
    polyorder: int,
) -> NDArray[np.float64]:
    """
    First-difference acceleration, zero at the first epoch, smoothed per axis.
    """
    acc_raw = np.diff(vel, axis=0) / np.diff(time)[:, np.newaxis]
    acc_raw = np.vstack([np.zeros((1, 3)), acc_raw])
    return _smooth(acc_raw, window_length, polyorder)


def true_specific_force(
    trajectory: ReferenceTrajectory,
    window_length: int = SGOLAY_WINDOW,
    polyorder: int = SGOLAY_ORDER,
) -> NDArray[np.float64]:
    """
    True specific force in the body frame (without gravity and Coriolis terms).

    The source is selected by ``trajectory.acceleration_source``:

    - ``DIRECT``: the provided specific force is returned as is.
    - ``VELOCITY``: the velocity is differentiated by first differences (the
      first epoch is set to zero), smoothed with a Savitzky-Golay filter, and
      rotated to the body frame.
    - ``POSITION``: the acceleration is derived from the geodetic position (see
      :meth:`ReferenceTrajectory.velocity_from_position`) and rotated to the
      body frame.

    Parameters
    ----------
    trajectory : ReferenceTrajectory
        Reference trajectory.
    window_length : int, default 45
        Length of the smoothing window in samples. Must be odd and not exceed
        the number of epochs.
    polyorder : int, default 10
        Order of the smoothing polynomial.

    Returns
    -------
    numpy.ndarray, shape (n, 3)
        True specific force in m/s^2.
    """
    source = trajectory.acceleration_source

    if source is AccelerationSource.DIRECT:
        return trajectory.specific_force  # type: ignore[return-value]
    elif source is AccelerationSource.VELOCITY:
        vel: NDArray[np.float64] = trajectory.vel  # type: ignore[assignment]
        acc_ned = _acceleration_from_velocity(
            trajectory.time, vel, window_length, polyorder
        )
    else:
        _, acc_ned = trajectory.velocity_from_position(window_length, polyorder)

    return nav2body(acc_ned, trajectory.attitude_dcm)


def gravity_coriolis_body(
    trajectory: ReferenceTrajectory,
    gravity_model: GravityModel = gravity_ned,
    coriolis_model: CoriolisModel = coriolis_ned,
    vel: ArrayLike | None = None,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Gravity and Coriolis accelerations rotated to the body frame.

    The Coriolis acceleration uses ``vel`` if given, otherwise the trajectory
    velocity, and as a last resort the velocity derived from the geodetic
    position (see :meth:`ReferenceTrajectory.ned_velocity_from_position`).

    Parameters
    ----------
    trajectory : ReferenceTrajectory
        Reference trajectory.
    gravity_model : callable, default :func:`~accsim.gravity_ned`
        Function of latitude (n,) and height (n,) returning the gravity
        contribution to the specific force in the navigation frame, shape (n, 3).
    coriolis_model : callable, default :func:`~accsim.coriolis_ned`
        Function of latitude (n,), velocity (n, 3) and height (n,) returning the
        Coriolis acceleration in the navigation frame, shape (n, 3).
    vel : array-like, shape (n, 3), optional
        NED velocity in m/s used for the Coriolis acceleration.

    Returns
    -------
    gravity_b : numpy.ndarray, shape (n, 3)
        Gravity contribution to the specific force, see :func:`gravity_ned`.
    coriolis_b : numpy.ndarray, shape (n, 3)
        Coriolis acceleration, see :func:`coriolis_ned`.
    """
    if vel is None:
        vel = trajectory.vel
    if vel is None:
        if trajectory.lon is None:
            raise ValueError(
                "Coriolis acceleration requires either 'vel' or 'lon' to be provided."
            )
        vel = trajectory.ned_velocity_from_position()

    grav_n = gravity_model(trajectory.lat, trajectory.h)
    vel = np.asarray(vel, dtype=np.float64)
    cor_n = coriolis_model(trajectory.lat, vel, trajectory.h)

    grav_b = nav2body(grav_n, trajectory.attitude_dcm)
    cor_b = nav2body(cor_n, trajectory.attitude_dcm)
    return grav_b, cor_b


def _check_sample_freq(
    trajectory: ReferenceTrajectory, profile: AccelerometerProfile
) -> None:
    if trajectory.epoch_count < 2:
        return
    dt_traj = np.median(np.diff(trajectory.time))
    if abs(dt_traj * profile.sample_freq - 1.0) > 0.01:
        warn(
            f"Profile sample_freq ({profile.sample_freq} Hz) does not match the "
            f"trajectory sampling ({1.0 / dt_traj:.6g} Hz)."
        )


def simulate_accelerometer(
    trajectory: ReferenceTrajectory,
    profile: AccelerometerProfile,
    seed: int | np.random.Generator | None = None,
    window_length: int = SGOLAY_WINDOW,
    polyorder: int = SGOLAY_ORDER,
    gravity_model: GravityModel = gravity_ned,
    coriolis_model: CoriolisModel = coriolis_ned,
    return_components: bool = False,
) -> NDArray[np.float64] | tuple[NDArray[np.float64], AccelerometerComponents]:
    """
    Simulate accelerometer (specific force) measurements in the body frame.

    The simulated measurement is::

        f_sim = f_true - a_cor + g + w + b_fix + b_dyn

    where ``f_true`` is the true specific force (see
    :func:`true_specific_force`), ``a_cor`` and ``g`` the Coriolis and gravity
    terms in the body frame (see :func:`gravity_coriolis_body`), ``w`` white
    noise, ``b_fix`` a constant bias and ``b_dyn`` the bias instability.

    Parameters
    ----------
    trajectory : ReferenceTrajectory
        Reference trajectory with n epochs.
    profile : AccelerometerProfile
        Accelerometer error profile.
    seed : int or numpy.random.Generator, optional
        Seed or random number generator. All random draws of one simulation come
        from this source, in the order: fixed bias, white noise, bias
        instability.
    window_length : int, default 45
        Length of the Savitzky-Golay smoothing window used when the
        acceleration is derived from velocity or position.
    polyorder : int, default 10
        Order of the smoothing polynomial.
    gravity_model : callable, default :func:`~accsim.gravity_ned`
        Gravity model, see :func:`gravity_coriolis_body`.
    coriolis_model : callable, default :func:`~accsim.coriolis_ned`
        Coriolis model, see :func:`gravity_coriolis_body`.
    return_components : bool, default False
        Whether to also return the individual terms of the signal.

    Returns
    -------
    f_sim : numpy.ndarray, shape (n, 3)
        Simulated specific force in m/s^2.
    components : AccelerometerComponents
        The individual terms. Only returned if ``return_components`` is True.

    Notes
    -----
    Non-finite latitude, height or velocity values are not guarded against and
    give non-finite measurements at the affected epochs.
    """
    n = trajectory.epoch_count
    if trajectory.acceleration_source is not AccelerationSource.DIRECT:
        _check_window(n, window_length, polyorder)
    _check_sample_freq(trajectory, profile)

    vel_n: NDArray[np.float64] | None = None
    if trajectory.acceleration_source is AccelerationSource.POSITION:
        vel_n, acc_n = trajectory.velocity_from_position(window_length, polyorder)
        acc_b = nav2body(acc_n, trajectory.attitude_dcm)
    else:
        acc_b = true_specific_force(trajectory, window_length, polyorder)
    grav_b, cor_b = gravity_coriolis_body(
        trajectory, gravity_model, coriolis_model, vel=vel_n
    )

    rng = np.random.default_rng(seed)
    components = AccelerometerComponents(
        true_accel=acc_b,
        gravity=grav_b,
        coriolis=cor_b,
        fixed_bias=fixed_bias(profile.fixed_bias_bound, n, seed=rng),
        white_noise=white_noise(profile.white_noise_std, n, seed=rng),
        bias_instability=bias_instability(
            profile.bias_drift_std,
            profile.bias_corr_time,
            profile.sample_freq,
            n,
            seed=rng,
        ),
    )

    f_sim = components.total()
    if return_components:
        return f_sim, components
    return f_sim
