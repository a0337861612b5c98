import numpy as np
from numba import njit
from numpy.typing import ArrayLike, NDArray

from .constants import A_WGS84, E_WGS84


@njit  # type: ignore[misc]
def _rot_matrix_from_euler(euler: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Compute the rotation matrix (from-body-to-navigation) from Euler angles.

    Parameters
    ----------
    euler : numpy.ndarray, shape (3,)
        Vector of Euler angles in radians (ZYX convention). Contains the following
        three Euler angles in order:
            - Roll (alpha): Rotation about the x-axis.
            - Pitch (beta): Rotation about the y-axis.
            - Yaw (gamma): Rotation about the z-axis.

    Returns
    -------
    numpy.ndarray, shape (3, 3)
        Rotation matrix.
    """
    alpha, beta, gamma = euler
    cos_gamma = np.cos(gamma)
    sin_gamma = np.sin(gamma)
    cos_beta = np.cos(beta)
    sin_beta = np.sin(beta)
    cos_alpha = np.cos(alpha)
    sin_alpha = np.sin(alpha)

    rot_00 = cos_gamma * cos_beta
    rot_01 = -sin_gamma * cos_alpha + cos_gamma * sin_beta * sin_alpha
    rot_02 = sin_gamma * sin_alpha + cos_gamma * sin_beta * cos_alpha

    rot_10 = sin_gamma * cos_beta
    rot_11 = cos_gamma * cos_alpha + sin_gamma * sin_beta * sin_alpha
    rot_12 = -cos_gamma * sin_alpha + sin_gamma * sin_beta * cos_alpha

    rot_20 = -sin_beta
    rot_21 = cos_beta * sin_alpha
    rot_22 = cos_beta * cos_alpha

    rot = np.array(
        [[rot_00, rot_01, rot_02], [rot_10, rot_11, rot_12], [rot_20, rot_21, rot_22]]
    )
    return rot


def dcm_from_euler(euler: ArrayLike, degrees: bool = False) -> NDArray[np.float64]:
    """
    Compute body-to-navigation direction cosine matrices from Euler angles (ZYX
    convention).

    Parameters
    ----------
    euler : array-like, shape (3,) or (n, 3)
        Euler angles [roll, pitch, yaw]. A 2D array is interpreted as one set of
        Euler angles per epoch.
    degrees : bool, default False
        Whether the provided Euler angles are in degrees or radians (default).

    Returns
    -------
    numpy.ndarray, shape (3, 3) or (n, 3, 3)
        Direction cosine matrix (or matrices) transforming vectors from the
        'body' frame to the 'navigation' frame.

    Notes
    -----
    The Euler angles describe how to transition from the 'navigation' frame to the
    'body' frame through three consecutive intrinsic and passive rotations in the
    ZYX order (yaw, pitch, roll).
    """
    euler_ = np.asarray_chkfinite(euler, dtype=np.float64)

    if degrees:
        euler_ = (np.pi / 180.0) * euler_

    if euler_.ndim == 1:
        return _rot_matrix_from_euler(euler_)  # type: ignore[no-any-return]
    return np.array([_rot_matrix_from_euler(euler_k) for euler_k in euler_])


def flatten_dcm(dcm: ArrayLike) -> NDArray[np.float64]:
    """
    Flatten body-to-navigation direction cosine matrices to the per-epoch row
    storage used by :class:`~accsim.ReferenceTrajectory`.

    Parameters
    ----------
    dcm : array-like, shape (3, 3) or (n, 3, 3)
        Body-to-navigation direction cosine matrices.

    Returns
    -------
    numpy.ndarray, shape (n, 9)
        One row-major flattened matrix per epoch, i.e.
        ``[r00, r01, r02, r10, r11, r12, r20, r21, r22]``.
    """
    dcm = np.asarray(dcm, dtype=np.float64)
    if dcm.shape[-2:] != (3, 3):
        raise ValueError("dcm must have shape (3, 3) or (n, 3, 3).")
    return dcm.reshape(-1, 9)


def unflatten_dcm(rows: ArrayLike) -> NDArray[np.float64]:
    """
    Inverse of :func:`flatten_dcm`.

    Parameters
    ----------
    rows : array-like, shape (n, 9)
        Row-major flattened body-to-navigation direction cosine matrices.

    Returns
    -------
    numpy.ndarray, shape (n, 3, 3)
        Body-to-navigation direction cosine matrices.
    """
    rows = np.asarray(rows, dtype=np.float64)
    if rows.ndim != 2 or rows.shape[1] != 9:
        raise ValueError("rows must have shape (n, 9).")
    return rows.reshape(-1, 3, 3)


def nav2body(vec_n: ArrayLike, attitude_dcm: ArrayLike) -> NDArray[np.float64]:
    """
    Rotate per-epoch navigation frame vectors into the body frame.

    Parameters
    ----------
    vec_n : array-like, shape (n, 3)
        Vectors expressed in the navigation frame, one per epoch.
    attitude_dcm : array-like, shape (n, 9)
        Row-major flattened body-to-navigation direction cosine matrices, one per
        epoch (see :func:`flatten_dcm`).

    Returns
    -------
    numpy.ndarray, shape (n, 3)
        Vectors expressed in the body frame, ``v_b = R_nb^T @ v_n``.
    """
    vec_n = np.asarray(vec_n, dtype=np.float64)
    R_nb = unflatten_dcm(attitude_dcm)
    if vec_n.shape != (R_nb.shape[0], 3):
        raise ValueError(
            f"vec_n must have shape ({R_nb.shape[0]}, 3), got {vec_n.shape}."
        )
    return np.einsum("nji,nj->ni", R_nb, vec_n)


def _is_orthonormal(dcm: NDArray[np.float64], atol: float = 1e-6) -> bool:
    """Check that all (n, 3, 3) matrices are proper rotation matrices."""
    eye = np.einsum("nji,njk->nik", dcm, dcm)
    det = np.linalg.det(dcm)
    return bool(
        np.allclose(eye, np.eye(3), atol=atol) and np.allclose(det, 1.0, atol=atol)
    )


def llh2ecef(
    lat: ArrayLike, lon: ArrayLike, h: ArrayLike
) -> NDArray[np.float64]:
    """
    Convert geodetic coordinates (WGS-84) to Earth-centered, Earth-fixed (ECEF)
    Cartesian coordinates.

    Parameters
    ----------
    lat : array-like, shape (n,)
        Latitude in radians.
    lon : array-like, shape (n,)
        Longitude in radians.
    h : array-like, shape (n,)
        Height above the ellipsoid in meters.

    Returns
    -------
    numpy.ndarray, shape (n, 3)
        ECEF coordinates [x, y, z] in meters.
    """
    lat = np.asarray(lat, dtype=np.float64)
    lon = np.asarray(lon, dtype=np.float64)
    h = np.asarray(h, dtype=np.float64)

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    R_N = A_WGS84 / np.sqrt(1.0 - E_WGS84**2 * sin_lat**2)

    x = (R_N + h) * cos_lat * np.cos(lon)
    y = (R_N + h) * cos_lat * np.sin(lon)
    z = (R_N * (1.0 - E_WGS84**2) + h) * sin_lat
    return np.column_stack([x, y, z])


def _rot_matrix_ned_from_ecef(
    lat: NDArray[np.float64], lon: NDArray[np.float64]
) -> NDArray[np.float64]:
    """
    Rotation matrices transforming vectors from the ECEF frame to the local NED
    frame.

    Parameters
    ----------
    lat, lon : numpy.ndarray, shape (n,)
        Latitude and longitude in radians.

    Returns
    -------
    numpy.ndarray, shape (n, 3, 3)
        Rotation matrices, such that ``v_ned = R @ v_ecef``.
    """
    sin_lat, cos_lat = np.sin(lat), np.cos(lat)
    sin_lon, cos_lon = np.sin(lon), np.cos(lon)
    zeros = np.zeros_like(lat)

    rot = np.array(
        [
            [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
            [-sin_lon, cos_lon, zeros],
            [-cos_lat * cos_lon, -cos_lat * sin_lon, -sin_lat],
        ]
    )
    return np.moveaxis(rot, -1, 0)
