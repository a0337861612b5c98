"""
IMPORTANT
---------

SciPy Rotation implementation is used as reference in tests. However, SciPy
operates with active rotations, whereas passive rotations are considered here. Keep in
mind that passive rotations is simply the inverse active rotations and vice versa.
"""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

import accsim as asim
from accsim import _transforms


@pytest.mark.parametrize(
    "euler", np.random.default_rng(0).uniform(-90.0, 90.0, size=(10, 3)).tolist()
)
def test__rot_matrix_from_euler(euler):
    rot_out = _transforms._rot_matrix_from_euler(np.radians(euler))
    rot_expect = Rotation.from_euler("ZYX", euler[::-1], degrees=True).as_matrix()
    np.testing.assert_array_almost_equal(rot_out, rot_expect)


class Test_dcm_from_euler:
    def test_pure_yaw(self):
        dcm = asim.dcm_from_euler([0.0, 0.0, 90.0], degrees=True)
        dcm_expect = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        np.testing.assert_array_almost_equal(dcm, dcm_expect)

    def test_multiple(self):
        euler = np.array([[10.0, 0.0, 0.0], [0.0, 20.0, 0.0], [0.0, 0.0, 30.0]])
        dcm = asim.dcm_from_euler(euler, degrees=True)

        assert dcm.shape == (3, 3, 3)
        for dcm_k, euler_k in zip(dcm, euler):
            np.testing.assert_array_almost_equal(
                dcm_k, asim.dcm_from_euler(euler_k, degrees=True)
            )

    def test_radians(self):
        np.testing.assert_array_almost_equal(
            asim.dcm_from_euler(np.radians([10.0, 20.0, 30.0])),
            asim.dcm_from_euler([10.0, 20.0, 30.0], degrees=True),
        )


class Test_flatten_dcm:
    def test_row_major(self):
        dcm = np.arange(9.0).reshape(3, 3)
        rows = asim.flatten_dcm(dcm)
        np.testing.assert_array_equal(rows, [np.arange(9.0)])

    def test_roundtrip_shape(self):
        dcm = asim.dcm_from_euler(np.zeros((4, 3)))
        rows = asim.flatten_dcm(dcm)
        assert rows.shape == (4, 9)
        np.testing.assert_array_equal(asim.unflatten_dcm(rows), dcm)

    def test_raises(self):
        with pytest.raises(ValueError):
            asim.flatten_dcm(np.zeros((2, 4)))
        with pytest.raises(ValueError):
            asim.unflatten_dcm(np.zeros((2, 8)))


class Test_nav2body:
    @pytest.fixture
    def rows_yaw90(self):
        # Body x-axis pointing east
        return np.array([[0.0, -1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0]])

    def test_yaw90_east(self, rows_yaw90):
        v_b = asim.nav2body(np.array([[0.0, 1.0, 0.0]]), rows_yaw90)
        np.testing.assert_array_almost_equal(v_b, [[1.0, 0.0, 0.0]])

    def test_yaw90_north(self, rows_yaw90):
        v_b = asim.nav2body(np.array([[1.0, 0.0, 0.0]]), rows_yaw90)
        np.testing.assert_array_almost_equal(v_b, [[0.0, -1.0, 0.0]])

    def test_column_major_reshape_equivalence(self):
        rows = asim.flatten_dcm(asim.dcm_from_euler([10.0, -20.0, 135.0], True))
        v_n = np.array([[1.0, 2.0, 3.0]])

        v_b = asim.nav2body(v_n, rows)
        v_b_expect = rows[0].reshape(3, 3, order="F") @ v_n[0]
        np.testing.assert_array_almost_equal(v_b[0], v_b_expect)

    def test_per_epoch(self):
        euler = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 90.0], [90.0, 0.0, 0.0]])
        rows = asim.flatten_dcm(asim.dcm_from_euler(euler, degrees=True))
        v_n = np.array([[0.0, 0.0, 1.0], [0.0, 0.0, 1.0], [0.0, 0.0, 1.0]])

        v_b = asim.nav2body(v_n, rows)

        v_b_expect = np.array([[0.0, 0.0, 1.0], [0.0, 0.0, 1.0], [0.0, 1.0, 0.0]])
        np.testing.assert_array_almost_equal(v_b, v_b_expect)

    def test_shape_mismatch(self, rows_yaw90):
        with pytest.raises(ValueError):
            asim.nav2body(np.zeros((2, 3)), rows_yaw90)


def test__is_orthonormal():
    dcm = asim.dcm_from_euler(np.random.default_rng(1).uniform(-1.0, 1.0, (5, 3)))
    assert _transforms._is_orthonormal(dcm)
    assert not _transforms._is_orthonormal(2.0 * dcm)
    assert not _transforms._is_orthonormal(-dcm)  # improper rotation


class Test_llh2ecef:
    def test_equator(self):
        xyz = asim.llh2ecef([0.0], [0.0], [0.0])
        np.testing.assert_array_almost_equal(xyz, [[6378137.0, 0.0, 0.0]])

    def test_equator_east(self):
        xyz = asim.llh2ecef([0.0], [np.pi / 2.0], [100.0])
        np.testing.assert_array_almost_equal(xyz, [[0.0, 6378237.0, 0.0]], decimal=6)

    def test_pole(self):
        xyz = asim.llh2ecef([np.pi / 2.0], [0.0], [0.0])
        assert xyz[0, 0] == pytest.approx(0.0, abs=1e-6)
        assert xyz[0, 2] == pytest.approx(6356752.3142, abs=0.01)


class Test__rot_matrix_ned_from_ecef:
    def test_equator(self):
        rot = _transforms._rot_matrix_ned_from_ecef(np.array([0.0]), np.array([0.0]))
        rot_expect = np.array([[0.0, 0.0, 1.0], [0.0, 1.0, 0.0], [-1.0, 0.0, 0.0]])
        assert rot.shape == (1, 3, 3)
        np.testing.assert_array_almost_equal(rot[0], rot_expect)

    def test_orthonormal(self):
        lat = np.radians([10.0, 45.0, -60.0])
        lon = np.radians([5.0, -120.0, 170.0])
        rot = _transforms._rot_matrix_ned_from_ecef(lat, lon)
        assert _transforms._is_orthonormal(rot)

    def test_east_axis(self):
        lat = np.radians([30.0])
        lon = np.radians([40.0])
        rot = _transforms._rot_matrix_ned_from_ecef(lat, lon)
        east_ecef = rot[0].T @ np.array([0.0, 1.0, 0.0])
        np.testing.assert_array_almost_equal(
            east_ecef, [-np.sin(lon[0]), np.cos(lon[0]), 0.0]
        )
