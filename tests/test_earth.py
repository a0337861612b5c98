import numpy as np
import pytest

import accsim as asim
from accsim.constants import A_WGS84, E_WGS84, OMEGA_IE


@pytest.mark.parametrize(
    "mu, g_expect",
    [
        (None, 9.80665),
        (0.0, 9.780325335903891718546),
        (90.0, 9.8321849378634),
        (59.91, 9.81910618638375),
    ],
)
def test_gravity(mu, g_expect):
    g_out = asim.gravity(mu)
    assert g_out == pytest.approx(g_expect)


def test_gravity_radians():
    assert asim.gravity(np.radians(59.91), degrees=False) == pytest.approx(
        9.81910618638375
    )


def test_gravity_array():
    g_out = asim.gravity(np.array([0.0, 90.0, 59.91]))
    np.testing.assert_allclose(
        g_out, [9.780325335903891718546, 9.8321849378634, 9.81910618638375]
    )


class Test_radii:
    def test_equator(self):
        R_M, R_N = asim.radii([0.0])
        assert R_M[0] == pytest.approx(A_WGS84 * (1.0 - E_WGS84**2))
        assert R_N[0] == pytest.approx(A_WGS84)

    def test_pole(self):
        R_M, R_N = asim.radii([np.pi / 2.0])
        R_pole = A_WGS84 / np.sqrt(1.0 - E_WGS84**2)
        assert R_M[0] == pytest.approx(R_pole)
        assert R_N[0] == pytest.approx(R_pole)


class Test_gravity_ned:
    def test_ellipsoid(self):
        lat = np.radians([0.0, 90.0, 59.91])
        g_ned = asim.gravity_ned(lat, np.zeros(3))

        g_expect = np.zeros((3, 3))
        g_expect[:, 2] = [-9.780325335903891718546, -9.8321849378634, -9.81910618638375]
        np.testing.assert_array_almost_equal(g_ned, g_expect)

    def test_height(self):
        lat = np.radians([45.0])
        h = np.array([1000.0])
        g_ned = asim.gravity_ned(lat, h)

        R_M, R_N = asim.radii(lat)
        R_0 = np.sqrt(R_M[0] * R_N[0])
        g_expect = asim.gravity(45.0) / (1.0 + 1000.0 / R_0) ** 2

        assert g_ned[0, 2] == pytest.approx(-g_expect)
        assert g_ned[0, 2] > -asim.gravity(45.0)
        np.testing.assert_array_equal(g_ned[0, :2], [0.0, 0.0])

    def test_non_finite(self):
        g_ned = asim.gravity_ned([np.nan, 0.0], [0.0, np.nan])
        assert np.isnan(g_ned[:, 2]).all()


class Test_earth_rate_ned:
    def test_equator(self):
        w = asim.earth_rate_ned([0.0])
        np.testing.assert_array_almost_equal(w, [[OMEGA_IE, 0.0, 0.0]])

    def test_pole(self):
        w = asim.earth_rate_ned([np.pi / 2.0])
        np.testing.assert_array_almost_equal(w, [[0.0, 0.0, -OMEGA_IE]])


class Test_transport_rate_ned:
    def test_stationary(self):
        w = asim.transport_rate_ned([0.5], [[0.0, 0.0, 0.0]], [100.0])
        np.testing.assert_array_equal(w, [[0.0, 0.0, 0.0]])

    def test_east_equator(self):
        w = asim.transport_rate_ned([0.0], [[0.0, 10.0, 0.0]], [0.0])
        np.testing.assert_array_almost_equal(w, [[10.0 / A_WGS84, 0.0, 0.0]])

    def test_north(self):
        lat = np.array([0.3])
        w = asim.transport_rate_ned(lat, [[10.0, 0.0, 0.0]], [50.0])
        R_M, _ = asim.radii(lat)
        w_expect = [[0.0, -10.0 / (R_M[0] + 50.0), 0.0]]
        np.testing.assert_array_almost_equal(w, w_expect)


class Test_coriolis_ned:
    def test_stationary(self):
        a = asim.coriolis_ned([0.5, 1.0], np.zeros((2, 3)), [0.0, 10.0])
        np.testing.assert_array_equal(a, np.zeros((2, 3)))

    def test_east_equator(self):
        v = 100.0
        a = asim.coriolis_ned([0.0], [[0.0, v, 0.0]], [0.0])
        a_expect = [[0.0, 0.0, (v / A_WGS84 + 2.0 * OMEGA_IE) * v]]
        np.testing.assert_array_almost_equal(a, a_expect)

    def test_north_pole(self):
        v = 10.0
        a = asim.coriolis_ned([np.pi / 2.0], [[v, 0.0, 0.0]], [0.0])
        # Earth rate along -D, transport rate along -E
        assert a[0, 1] == pytest.approx(-2.0 * OMEGA_IE * v)
        assert a[0, 0] == pytest.approx(0.0, abs=1e-12)

    def test_non_finite(self):
        vel = [[np.nan, 1.0, 0.0], [1.0, 1.0, 0.0]]
        a = asim.coriolis_ned([0.1, 0.1], vel, [0.0, 0.0])
        assert np.isnan(a[0]).any()
        assert np.isfinite(a[1]).all()
