from enum import Enum
from warnings import warn

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.signal import savgol_filter

from .constants import SGOLAY_ORDER, SGOLAY_WINDOW
from ._transforms import (
    _is_orthonormal,
    _rot_matrix_ned_from_ecef,
    flatten_dcm,
    llh2ecef,
)


class AccelerationSource(Enum):
    """
    Where the true specific force of a reference trajectory comes from.

    - ``DIRECT``: specific force is given in the body frame.
    - ``VELOCITY``: derived from the NED velocity.
    - ``POSITION``: derived from latitude, longitude and height.
    """

    DIRECT = "direct"
    VELOCITY = "velocity"
    POSITION = "position"


def _check_window(n: int, window_length: int, polyorder: int) -> None:
    """
    Validate Savitzky-Golay filter parameters against the number of epochs.
    """
    if window_length % 2 == 0 or window_length < 1:
        raise ValueError("'window_length' must be a positive odd integer.")
    if polyorder >= window_length:
        raise ValueError("'polyorder' must be less than 'window_length'.")
    if window_length > n:
        raise ValueError(
            f"Smoothing window_length ({window_length}) exceeds the number of "
            f"epochs ({n}). Provide a longer trajectory or a shorter window."
        )


def _smooth(
    x: NDArray[np.float64], window_length: int, polyorder: int
) -> NDArray[np.float64]:
    """
    Polynomial least-squares (Savitzky-Golay) smoothing of each column of `x`.
    """
    _check_window(x.shape[0], window_length, polyorder)
    return savgol_filter(x, window_length, polyorder, axis=0, mode="interp")


class ReferenceTrajectory:
    """
    Reference trajectory describing the true motion and attitude of a sensor.

    The true specific force is taken from ``specific_force`` if provided,
    otherwise it is derived from ``vel``, and as a last resort from the
    geodetic position (``lat``, ``lon``, ``h``).

    Parameters
    ----------
    time : array-like, shape (n,)
        Strictly increasing time vector in seconds.
    lat : array-like, shape (n,)
        Latitude.
    h : array-like, shape (n,)
        Height above the WGS-84 ellipsoid in meters.
    attitude_dcm : array-like, shape (n, 9) or (n, 3, 3)
        Body-to-navigation (NED) direction cosine matrices. Flattened rows are
        row-major, see :func:`~accsim.flatten_dcm`.
    vel : array-like, shape (n, 3), optional
        Velocity [v_N, v_E, v_D] in m/s.
    specific_force : array-like, shape (n, 3), optional
        True specific force in the body frame in m/s^2.
    lon : array-like, shape (n,), optional
        Longitude. Required if neither ``specific_force`` nor ``vel`` is given.
    degrees : bool, default False
        Whether latitude and longitude are given in degrees or radians (default).
        They are stored in radians.

    Notes
    -----
    Non-finite values in latitude, height or velocity are accepted and propagate
    to the simulated measurements.
    """

    def __init__(
        self,
        time: ArrayLike,
        lat: ArrayLike,
        h: ArrayLike,
        attitude_dcm: ArrayLike,
        vel: ArrayLike | None = None,
        specific_force: ArrayLike | None = None,
        lon: ArrayLike | None = None,
        degrees: bool = False,
    ) -> None:
        self._time = np.asarray(time, dtype=np.float64)
        if self._time.ndim != 1 or self._time.size == 0:
            raise ValueError("'time' must be a non-empty 1D array.")
        if np.any(~(np.diff(self._time) > 0.0)):
            raise ValueError("'time' must be strictly increasing.")
        n = self._time.size

        scale = np.pi / 180.0 if degrees else 1.0
        self._lat = scale * self._epoch_array(lat, "lat", n)
        self._h = self._epoch_array(h, "h", n)
        self._lon = (
            None if lon is None else scale * self._epoch_array(lon, "lon", n)
        )
        self._vel = None if vel is None else self._epoch_array(vel, "vel", n, 3)
        self._specific_force = (
            None
            if specific_force is None
            else self._epoch_array(specific_force, "specific_force", n, 3)
        )

        attitude_dcm = np.asarray(attitude_dcm, dtype=np.float64)
        if attitude_dcm.ndim == 3:
            attitude_dcm = flatten_dcm(attitude_dcm)
        self._attitude_dcm = self._epoch_array(attitude_dcm, "attitude_dcm", n, 9)
        if not _is_orthonormal(self._attitude_dcm.reshape(-1, 3, 3)):
            warn("'attitude_dcm' contains matrices that are not proper rotations.")

        if self._specific_force is None and self._vel is None and self._lon is None:
            raise ValueError(
                "Either 'specific_force', 'vel' or 'lon' must be provided."
            )

    @staticmethod
    def _epoch_array(
        value: ArrayLike, name: str, n: int, width: int | None = None
    ) -> NDArray[np.float64]:
        value = np.asarray(value, dtype=np.float64)
        shape = (n,) if width is None else (n, width)
        if value.shape != shape:
            raise ValueError(f"'{name}' must have shape {shape}, got {value.shape}.")
        return value.copy()

    @property
    def epoch_count(self) -> int:
        """Number of epochs, n."""
        return self._time.size

    def __len__(self) -> int:
        return self.epoch_count

    @property
    def time(self) -> NDArray[np.float64]:
        return self._time.copy()

    @property
    def lat(self) -> NDArray[np.float64]:
        """Latitude in radians."""
        return self._lat.copy()

    @property
    def lon(self) -> NDArray[np.float64] | None:
        """Longitude in radians, or None."""
        return None if self._lon is None else self._lon.copy()

    @property
    def h(self) -> NDArray[np.float64]:
        return self._h.copy()

    @property
    def vel(self) -> NDArray[np.float64] | None:
        return None if self._vel is None else self._vel.copy()

    @property
    def specific_force(self) -> NDArray[np.float64] | None:
        return None if self._specific_force is None else self._specific_force.copy()

    @property
    def attitude_dcm(self) -> NDArray[np.float64]:
        """Row-major flattened body-to-navigation matrices, shape (n, 9)."""
        return self._attitude_dcm.copy()

    @property
    def acceleration_source(self) -> AccelerationSource:
        """The source used to resolve the true specific force."""
        if self._specific_force is not None:
            return AccelerationSource.DIRECT
        elif self._vel is not None:
            return AccelerationSource.VELOCITY
        else:
            return AccelerationSource.POSITION

    def _ecef_velocity(
        self,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """ECEF velocity and the ECEF-to-NED rotation matrices of each epoch."""
        if self._lon is None:
            raise ValueError("'lon' is required to derive velocity from position.")
        if self.epoch_count < 2:
            raise ValueError("At least two epochs are required to differentiate.")

        pos_ecef = llh2ecef(self._lat, self._lon, self._h)
        vel_ecef = np.gradient(pos_ecef, self._time, axis=0)
        return vel_ecef, _rot_matrix_ned_from_ecef(self._lat, self._lon)

    def ned_velocity_from_position(self) -> NDArray[np.float64]:
        """
        Derive the velocity in the NED frame from the geodetic position.

        The position is converted to ECEF coordinates, differentiated with
        respect to time and rotated to the local NED frame of each epoch. No
        smoothing is applied, so any trajectory with two or more epochs is
        accepted.

        Returns
        -------
        numpy.ndarray, shape (n, 3)
            Velocity in m/s.
        """
        vel_ecef, R_ne = self._ecef_velocity()
        return np.einsum("nij,nj->ni", R_ne, vel_ecef)

    def velocity_from_position(
        self, window_length: int = SGOLAY_WINDOW, polyorder: int = SGOLAY_ORDER
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        Derive velocity and acceleration in the NED frame from the geodetic
        position.

        The position is converted to ECEF coordinates and differentiated twice
        with respect to time. The ECEF velocity and acceleration are then
        rotated to the local NED frame of each epoch, and the acceleration is
        smoothed with a Savitzky-Golay filter.

        Parameters
        ----------
        window_length : int, default 45
            Length of the smoothing window in samples.
        polyorder : int, default 10
            Order of the smoothing polynomial.

        Returns
        -------
        vel_ned : numpy.ndarray, shape (n, 3)
            Velocity in m/s, see :meth:`ned_velocity_from_position`.
        acc_ned : numpy.ndarray, shape (n, 3)
            Smoothed acceleration in m/s^2.
        """
        vel_ecef, R_ne = self._ecef_velocity()
        _check_window(self.epoch_count, window_length, polyorder)

        acc_ecef = np.gradient(vel_ecef, self._time, axis=0)
        vel_ned = np.einsum("nij,nj->ni", R_ne, vel_ecef)
        acc_ned = np.einsum("nij,nj->ni", R_ne, acc_ecef)

        return vel_ned, _smooth(acc_ned, window_length, polyorder)
