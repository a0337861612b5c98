import numpy as np
from numpy.typing import ArrayLike, NDArray

from .constants import A_WGS84, E_WGS84, G_0, OMEGA_IE


def radii(lat: ArrayLike) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Radii of curvature of the WGS-84 ellipsoid.

    Parameters
    ----------
    lat : array-like, shape (n,)
        Latitude in radians.

    Returns
    -------
    R_M : numpy.ndarray, shape (n,)
        Meridian radius of curvature in meters.
    R_N : numpy.ndarray, shape (n,)
        Prime vertical (normal) radius of curvature in meters.
    """
    lat = np.asarray(lat, dtype=np.float64)
    den = 1.0 - E_WGS84**2 * np.sin(lat) ** 2
    R_M = A_WGS84 * (1.0 - E_WGS84**2) / den**1.5
    R_N = A_WGS84 / np.sqrt(den)
    return R_M, R_N


def gravity(
    lat: float | NDArray[np.float64] | None = None, degrees: bool = True
) -> float | NDArray[np.float64]:
    """
    Calculates the gravitational acceleration based on the World Geodetic System
    (1984) Ellipsoidal Gravity Formula (WGS-84).

    The WGS-84 formula is given by::

        g = g_e * (1 + k * sin(lat)^2) / sqrt(1 - e^2 * sin(lat)^2)

    where, ::

        g_e = 9.780325335903891718546
        k = 0.00193185265245827352087
        e^2 = 0.006694379990141316996137

    and ``lat`` is the latitude.

    If no latitude is provided, the 'standard gravity', ``g_0 = 9.80665``, is
    returned instead.

    Parameters
    ----------
    lat : float or numpy.ndarray, optional
        Latitude. If none provided, the 'standard gravity' is returned.
    degrees : bool, optional
        Specify whether the latitude, ``lat``, is in degrees or radians.
        Applicapble only if ``lat`` is provided.
    """
    if lat is None:
        return G_0

    g_e = 9.780325335903891718546  # gravity at equator
    k = 0.00193185265245827352087  # formula constant
    e_2 = 0.006694379990141316996137  # spheroid's squared eccentricity

    if degrees:
        lat = (np.pi / 180.0) * lat

    g = g_e * (1.0 + k * np.sin(lat) ** 2.0) / np.sqrt(1.0 - e_2 * np.sin(lat) ** 2.0)
    return g  # type: ignore[no-any-return]  # numpy funcs declare Any as return when given scalar-like


def gravity_ned(lat: ArrayLike, h: ArrayLike) -> NDArray[np.float64]:
    """
    Gravity contribution to the specific force, expressed in the NED frame.

    The gravity magnitude at the ellipsoid (see :func:`gravity`) is reduced with
    height as::

        g(lat, h) = g(lat) / (1 + h / R_0)^2,    R_0 = sqrt(R_M * R_N)

    The returned vector, ``[0, 0, -g]``, points upwards. It is what a stationary,
    level accelerometer measures, and it is added to the kinematic acceleration
    to obtain specific force.

    Parameters
    ----------
    lat : array-like, shape (n,)
        Latitude in radians.
    h : array-like, shape (n,)
        Height above the ellipsoid in meters.

    Returns
    -------
    numpy.ndarray, shape (n, 3)
        Gravity contribution per epoch in m/s^2.

    Notes
    -----
    Non-finite latitudes or heights give non-finite rows.
    """
    lat = np.asarray(lat, dtype=np.float64).reshape(-1)
    h = np.asarray(h, dtype=np.float64).reshape(-1)

    R_M, R_N = radii(lat)
    R_0 = np.sqrt(R_M * R_N)
    g = gravity(lat, degrees=False) / (1.0 + h / R_0) ** 2

    g_ned = np.zeros((lat.size, 3))
    g_ned[:, 2] = -g
    return g_ned


def earth_rate_ned(lat: ArrayLike) -> NDArray[np.float64]:
    """
    Earth rotation rate expressed in the NED frame.

    Parameters
    ----------
    lat : array-like, shape (n,)
        Latitude in radians.

    Returns
    -------
    numpy.ndarray, shape (n, 3)
        Angular rate of the ECEF frame relative to the inertial frame in rad/s.
    """
    lat = np.asarray(lat, dtype=np.float64).reshape(-1)
    return OMEGA_IE * np.column_stack(
        [np.cos(lat), np.zeros_like(lat), -np.sin(lat)]
    )


def transport_rate_ned(
    lat: ArrayLike, vel: ArrayLike, h: ArrayLike
) -> NDArray[np.float64]:
    """
    Transport rate, i.e., the angular rate of the NED frame relative to the ECEF
    frame caused by motion over the curved Earth.

    Parameters
    ----------
    lat : array-like, shape (n,)
        Latitude in radians.
    vel : array-like, shape (n, 3)
        Velocity [v_N, v_E, v_D] in m/s.
    h : array-like, shape (n,)
        Height above the ellipsoid in meters.

    Returns
    -------
    numpy.ndarray, shape (n, 3)
        Transport rate in rad/s.
    """
    lat = np.asarray(lat, dtype=np.float64).reshape(-1)
    vel = np.asarray(vel, dtype=np.float64).reshape(-1, 3)
    h = np.asarray(h, dtype=np.float64).reshape(-1)

    R_M, R_N = radii(lat)
    v_n, v_e = vel[:, 0], vel[:, 1]

    return np.column_stack(
        [
            v_e / (R_N + h),
            -v_n / (R_M + h),
            -v_e * np.tan(lat) / (R_N + h),
        ]
    )


def coriolis_ned(lat: ArrayLike, vel: ArrayLike, h: ArrayLike) -> NDArray[np.float64]:
    """
    Coriolis (and transport) acceleration expressed in the NED frame::

        a_cor = (w_en + 2 * w_ie) x v

    Parameters
    ----------
    lat : array-like, shape (n,)
        Latitude in radians.
    vel : array-like, shape (n, 3)
        Velocity [v_N, v_E, v_D] in m/s.
    h : array-like, shape (n,)
        Height above the ellipsoid in meters.

    Returns
    -------
    numpy.ndarray, shape (n, 3)
        Coriolis acceleration per epoch in m/s^2.

    Notes
    -----
    Non-finite inputs give non-finite rows.
    """
    vel = np.asarray(vel, dtype=np.float64).reshape(-1, 3)
    w = transport_rate_ned(lat, vel, h) + 2.0 * earth_rate_ned(lat)
    return np.cross(w, vel)
