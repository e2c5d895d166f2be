from unittest import TestCase

import numpy as np

import pandas as pd

from posekit.rotations import (Quaternion, EulerAngles, RotationMatrix, ToleranceOptions, DegeneratePolicy,
                               InvalidAxisError, NotUnitVectorError, DegenerateQuaternionError, DegenerateInputWarning,
                               quaternion_rot_x, quaternion_rot_z, euler_to_quaternion, euler_to_rotmat)


class TestQuaternion(TestCase):

    def check_quaternion(self, quaternion, expected):

        np.testing.assert_array_almost_equal(quaternion.array, expected)
        self.assertAlmostEqual(quaternion.w, expected[0])
        self.assertAlmostEqual(quaternion.x, expected[1])
        self.assertAlmostEqual(quaternion.y, expected[2])
        self.assertAlmostEqual(quaternion.z, expected[3])
        self.assertAlmostEqual(quaternion.q_scalar, expected[0])
        np.testing.assert_array_almost_equal(quaternion.q_vector, expected[1:])

    def test_init(self):

        self.check_quaternion(Quaternion(), [1, 0, 0, 0])
        self.check_quaternion(Quaternion.identity(), [1, 0, 0, 0])
        self.check_quaternion(Quaternion([0.5, 0.5, 0.5, 0.5]), [0.5, 0.5, 0.5, 0.5])
        self.check_quaternion(Quaternion(data=np.array([0, 1, 0, 0])), [0, 1, 0, 0])

        original = Quaternion([0.5, -0.5, 0.5, 0.5])
        copied = Quaternion(original)

        self.check_quaternion(copied, [0.5, -0.5, 0.5, 0.5])
        self.assertIsNot(copied, original)

        for bad in [[1, 0, 0], [[1, 0], [0, 0]], [[0, 1, 0, 0]], 1.0]:
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    Quaternion(bad)

    def test_array_is_a_copy(self):

        quaternion = Quaternion()

        quaternion.array[0] = 5

        self.assertEqual(quaternion.w, 1)

        source = np.array([1.0, 0, 0, 0])

        quaternion = Quaternion(source)

        source[0] = 5

        self.assertEqual(quaternion.w, 1)

    def test_about_axes(self):

        self.check_quaternion(Quaternion.about_x(0.4), quaternion_rot_x(0.4))
        self.check_quaternion(Quaternion.about_y(np.pi), [0, 0, 1, 0])
        self.check_quaternion(Quaternion.about_z(np.pi / 2), [np.sqrt(2) / 2, 0, 0, np.sqrt(2) / 2])

        self.check_quaternion(Quaternion.about_principal_axis(3, 0.4), quaternion_rot_z(0.4))

        with self.assertRaises(InvalidAxisError):
            Quaternion.about_principal_axis(0, 0.4)

        axis = np.array([0, 0.6, 0.8])

        self.check_quaternion(Quaternion.about_axis(axis, np.pi), [0, 0, 0.6, 0.8])

        with self.assertRaises(NotUnitVectorError):
            Quaternion.about_axis([0, 1, 1], 1.0)

    def test_from_euler(self):

        angles = (0.5, -0.3, 2.0)

        self.check_quaternion(Quaternion.object_to_inertial(EulerAngles(*angles)), euler_to_quaternion(*angles))
        self.check_quaternion(Quaternion.inertial_to_object(angles),
                              euler_to_quaternion(*angles, direction='inertial_to_object'))

        self.assertEqual(Quaternion.object_to_inertial(angles).conjugate(), Quaternion.inertial_to_object(angles))

    def test_from_rotation_matrix(self):

        angles = (0.5, -0.3, 2.0)

        quaternion = Quaternion.from_rotation_matrix(euler_to_rotmat(*angles), direction='object_to_inertial')

        expected = euler_to_quaternion(*angles)

        if quaternion.dot(expected) < 0:
            quaternion = -quaternion

        self.check_quaternion(quaternion, expected)

    def test_normalize(self):

        quaternion = Quaternion([2, 0, 0, 0])

        self.assertIsNone(quaternion.normalize())

        self.check_quaternion(quaternion, [1, 0, 0, 0])

        quaternion = Quaternion([0, 0, 0, 0])

        with self.assertRaises(DegenerateQuaternionError):
            quaternion.normalize()

        with self.assertWarns(DegenerateInputWarning):
            quaternion.normalize(options=ToleranceOptions(degenerate_policy=DegeneratePolicy.WARN))

        self.check_quaternion(quaternion, [1, 0, 0, 0])

    def test_drift(self):

        # repeated concatenation drifts off unit length and normalize fixes it
        step = Quaternion([1, 1e-3, 0, 0])

        quaternion = Quaternion()

        for _ in range(100):
            quaternion = quaternion * step

        self.assertGreater(quaternion.magnitude(), 1)

        quaternion.normalize()

        self.assertAlmostEqual(quaternion.magnitude(), 1)

    def test_magnitude_dot(self):

        self.assertAlmostEqual(Quaternion([1, 1, 1, 1]).magnitude(), 2)
        self.assertAlmostEqual(Quaternion([1, 2, 3, 4]).dot(Quaternion([4, 3, 2, 1])), 20)
        self.assertAlmostEqual(Quaternion([1, 2, 3, 4]).dot([1, 0, 0, 0]), 1)

    def test_inverse(self):

        quaternion = Quaternion.about_axis(np.array([1, 2, 2]) / 3, 0.9)

        np.testing.assert_array_almost_equal(np.asarray(quaternion.inverse()), np.asarray(quaternion.conjugate()))

        self.check_quaternion(quaternion * quaternion.inverse(), [1, 0, 0, 0])
        self.check_quaternion(quaternion.inverse() * quaternion, [1, 0, 0, 0])

        with self.assertRaises(DegenerateQuaternionError):
            Quaternion([0, 0, 0, 0]).inverse()

    def test_difference(self):

        quaternion_a = Quaternion.about_x(0.3)
        quaternion_b = Quaternion.about_z(-1.0)

        difference = quaternion_a.difference(quaternion_b)

        self.check_quaternion(quaternion_a * difference, quaternion_b.array)

    def test_angle_axis(self):

        axis = np.array([0, 0.6, -0.8])

        quaternion = Quaternion.about_axis(axis, 1.3)

        self.assertAlmostEqual(quaternion.rotation_angle(), 1.3)
        np.testing.assert_array_almost_equal(quaternion.rotation_axis(), axis)

        np.testing.assert_array_equal(Quaternion().rotation_axis(), [1, 0, 0])

    def test_pow(self):

        quaternion = Quaternion.about_y(1.0)

        self.check_quaternion(quaternion ** 0.5, Quaternion.about_y(0.5).array)
        self.check_quaternion(quaternion.pow(3), Quaternion.about_y(3.0).array)
        self.check_quaternion(quaternion ** 0, [1, 0, 0, 0])

    def test_to_euler(self):

        angles = EulerAngles(0.5, -0.3, 2.0)

        result = Quaternion.object_to_inertial(angles).to_euler()

        self.assertIsInstance(result, EulerAngles)
        np.testing.assert_array_almost_equal(np.asarray(result), np.asarray(angles))

        result = Quaternion.inertial_to_object(angles).to_euler('inertial_to_object')

        np.testing.assert_array_almost_equal(np.asarray(result), np.asarray(angles))

    def test_slerp(self):

        result = Quaternion.slerp(Quaternion.about_z(0.0), Quaternion.about_z(1.0), 0.5)

        self.assertIsInstance(result, Quaternion)
        self.check_quaternion(result, quaternion_rot_z(0.5))

        start = pd.Timestamp('2026-03-01T12:00:00')
        stop = pd.Timestamp('2026-03-01T12:00:10')

        result = Quaternion.slerp(Quaternion.about_z(0.0), Quaternion.about_z(1.0),
                                  pd.Timestamp('2026-03-01T12:00:02'), time0=start, time1=stop)

        self.check_quaternion(result, quaternion_rot_z(0.2))

        # the far hemisphere end takes the short way around
        result = Quaternion.slerp(Quaternion(), -Quaternion.about_x(1.0), 0.5)

        self.check_quaternion(result, quaternion_rot_x(0.5))

    def test_nlerp(self):

        result = Quaternion.nlerp(Quaternion.about_x(0.0), Quaternion.about_x(0.4), 0.5)

        self.assertIsInstance(result, Quaternion)
        self.check_quaternion(result, quaternion_rot_x(0.2))

    def test_mul(self):

        quaternion_1 = Quaternion.about_x(0.3)
        quaternion_2 = Quaternion.about_y(-1.2)

        product = quaternion_1 * quaternion_2

        self.assertIsInstance(product, Quaternion)

        vector = np.array([0.0, 1.0, 0.0])

        np.testing.assert_array_almost_equal(
            RotationMatrix.from_inertial_to_object_quaternion(product).inertial_to_object(vector),
            RotationMatrix.from_inertial_to_object_quaternion(quaternion_2).inertial_to_object(
                RotationMatrix.from_inertial_to_object_quaternion(quaternion_1).inertial_to_object(vector)
            )
        )

        with self.assertRaises(TypeError):
            quaternion_1 * [1, 0, 0, 0]

    def test_eq(self):

        self.assertEqual(Quaternion([0.5, 0.5, 0.5, 0.5]), Quaternion([0.5, 0.5, 0.5, 0.5]))

        # the same orientation but different components
        self.assertNotEqual(Quaternion([0.5, 0.5, 0.5, 0.5]), -Quaternion([0.5, 0.5, 0.5, 0.5]))

        self.assertNotEqual(Quaternion(), [1, 0, 0, 0])

    def test_copy(self):

        quaternion = Quaternion([0.5, 0.5, 0.5, 0.5])

        copied = quaternion.copy()

        self.assertEqual(copied, quaternion)
        self.assertIsNot(copied, quaternion)

        copied.normalize()
        copied = copied * Quaternion.about_x(1.0)

        self.assertEqual(quaternion, Quaternion([0.5, 0.5, 0.5, 0.5]))

    def test_array_protocol(self):

        quaternion = Quaternion([0.5, -0.5, 0.5, 0.5])

        np.testing.assert_array_equal(np.asarray(quaternion), [0.5, -0.5, 0.5, 0.5])
        self.assertEqual(list(quaternion), [0.5, -0.5, 0.5, 0.5])

    def test_repr(self):

        self.assertEqual(repr(Quaternion()), 'Quaternion(array([1., 0., 0., 0.]))')
        self.assertEqual(str(Quaternion()), '[1. 0. 0. 0.]')
