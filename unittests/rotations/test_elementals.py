from unittest import TestCase

import numpy as np

from posekit import rotations as rot
from posekit.rotations.core.tolerances import DegeneratePolicy


class TestWrapPi(TestCase):

    def test_in_range(self):

        for angle in [0.0, 1.0, -1.0, np.pi, -np.pi + 1e-12, 3.0]:
            self.assertEqual(rot.wrap_pi(angle), angle)

    def test_wrapped(self):

        self.assertAlmostEqual(rot.wrap_pi(-np.pi), np.pi)
        self.assertAlmostEqual(rot.wrap_pi(3 * np.pi), np.pi)
        self.assertAlmostEqual(rot.wrap_pi(3 * np.pi / 2), -np.pi / 2)
        self.assertAlmostEqual(rot.wrap_pi(-3 * np.pi / 2), np.pi / 2)
        self.assertAlmostEqual(rot.wrap_pi(7.0), 7.0 - 2 * np.pi)
        self.assertAlmostEqual(rot.wrap_pi(-20.0), -20.0 + 6 * np.pi)

    def test_idempotent(self):

        for angle in np.linspace(-20, 20, 81):
            wrapped = rot.wrap_pi(angle)

            self.assertGreater(wrapped, -np.pi)
            self.assertLessEqual(wrapped, np.pi)
            self.assertEqual(rot.wrap_pi(wrapped), wrapped)
            self.assertAlmostEqual(np.cos(wrapped), np.cos(angle))
            self.assertAlmostEqual(np.sin(wrapped), np.sin(angle))


class TestSafeAcos(TestCase):

    def test_safe_acos(self):

        self.assertEqual(rot.safe_acos(1 + 1e-9), 0.0)
        self.assertAlmostEqual(rot.safe_acos(-1 - 1e-9), np.pi)
        self.assertAlmostEqual(rot.safe_acos(0.5), np.pi / 3)
        self.assertAlmostEqual(rot.safe_acos(0), np.pi / 2)


class TestRotX(TestCase):

    def test_rot_x(self):

        np.testing.assert_array_almost_equal(rot.rot_x(0), np.eye(3))

        np.testing.assert_array_almost_equal(rot.rot_x(np.pi / 2), [[1, 0, 0], [0, 0, 1], [0, -1, 0]])

        # y rotates toward z
        np.testing.assert_array_almost_equal([0, 1, 0] @ rot.rot_x(np.pi / 2), [0, 0, 1])

        np.testing.assert_array_almost_equal(rot.rot_x(np.pi), [[1, 0, 0], [0, -1, 0], [0, 0, -1]])


class TestRotY(TestCase):

    def test_rot_y(self):

        np.testing.assert_array_almost_equal(rot.rot_y(0), np.eye(3))

        np.testing.assert_array_almost_equal(rot.rot_y(np.pi / 2), [[0, 0, -1], [0, 1, 0], [1, 0, 0]])

        # z rotates toward x
        np.testing.assert_array_almost_equal([0, 0, 1] @ rot.rot_y(np.pi / 2), [1, 0, 0])


class TestRotZ(TestCase):

    def test_rot_z(self):

        np.testing.assert_array_almost_equal(rot.rot_z(0), np.eye(3))

        np.testing.assert_array_almost_equal(rot.rot_z(np.pi / 2), [[0, 1, 0], [-1, 0, 0], [0, 0, 1]])

        # x rotates toward y
        np.testing.assert_array_almost_equal([1, 0, 0] @ rot.rot_z(np.pi / 2), [0, 1, 0])


class TestRotAxis(TestCase):

    def test_rot_axis(self):

        for angle in [-2.0, 0.3, 1.5]:
            np.testing.assert_array_equal(rot.rot_axis(1, angle), rot.rot_x(angle))
            np.testing.assert_array_equal(rot.rot_axis(2, angle), rot.rot_y(angle))
            np.testing.assert_array_equal(rot.rot_axis(3, angle), rot.rot_z(angle))

    def test_invalid_axis(self):

        for axis in [0, 4, -1]:
            with self.assertRaises(rot.InvalidAxisError):
                rot.rot_axis(axis, 1.0)

        # never downgraded to a warning
        with self.assertRaises(rot.InvalidAxisError):
            rot.setup_rotate(5, 1.0)


class TestRotAboutVector(TestCase):

    def test_principal_axes(self):

        for angle in [-1.0, 0.25, np.pi]:
            np.testing.assert_array_almost_equal(rot.rot_about_vector([1, 0, 0], angle), rot.rot_x(angle))
            np.testing.assert_array_almost_equal(rot.rot_about_vector([0, 1, 0], angle), rot.rot_y(angle))
            np.testing.assert_array_almost_equal(rot.rot_about_vector([0, 0, 1], angle), rot.rot_z(angle))

    def test_arbitrary_axis(self):

        axis = np.array([1, 2, -3]) / np.sqrt(14)

        matrix = rot.rot_about_vector(axis, 0.7)

        np.testing.assert_array_almost_equal(matrix @ matrix.T, np.eye(3))
        self.assertAlmostEqual(np.linalg.det(matrix), 1)

        # the axis is unchanged by the rotation
        np.testing.assert_array_almost_equal(axis @ matrix, axis)

        # matches the quaternion form
        np.testing.assert_array_almost_equal(matrix,
                                             rot.quaternion_to_rotmat(rot.quaternion_from_axis_angle(axis, 0.7)))

    def test_not_unit(self):

        with self.assertRaises(rot.NotUnitVectorError) as context:
            rot.rot_about_vector([1, 1, 0], 0.5)

        np.testing.assert_array_equal(context.exception.fallback, np.eye(3))

        # the error is a ValueError so generic handlers still work
        self.assertIsInstance(context.exception, ValueError)

    def test_not_unit_warn(self):

        options = rot.ToleranceOptions(degenerate_policy=DegeneratePolicy.WARN)

        with self.assertWarns(rot.DegenerateInputWarning):
            result = rot.rot_about_vector([2, 0, 0], 0.5, options=options)

        np.testing.assert_array_equal(result, np.eye(3))

    def test_unit_tolerance(self):

        # slightly off unit length is accepted within the tolerance
        rot.rot_about_vector([1 + 1e-8, 0, 0], 0.5)

        options = rot.ToleranceOptions(unit_length_tolerance=1e-12)

        with self.assertRaises(rot.NotUnitVectorError):
            rot.rot_about_vector([1 + 1e-8, 0, 0], 0.5, options=options)
