from unittest import TestCase

import numpy as np

from posekit import rotations as rot
from posekit.rotations.core.tolerances import DegeneratePolicy


def random_affine(seed):
    generator = np.random.default_rng(seed)

    # a well conditioned linear block with an arbitrary translation
    return np.vstack([np.eye(3) + 0.3 * generator.standard_normal((3, 3)), generator.standard_normal(3)])


class TestAffineSetup(TestCase):

    def test_identity(self):

        np.testing.assert_array_equal(rot.affine_identity(), np.vstack([np.eye(3), np.zeros(3)]))

        # identity transforms leave points alone
        np.testing.assert_array_equal(rot.affine_transform_point([1, -2, 3], rot.affine_identity()), [1, -2, 3])

    def test_translation(self):

        matrix = rot.setup_translation([1, 2, 3])

        np.testing.assert_array_equal(matrix[:3], np.eye(3))
        np.testing.assert_array_equal(rot.get_translation(matrix), [1, 2, 3])
        np.testing.assert_array_equal(rot.affine_transform_point([1, 1, 1], matrix), [2, 3, 4])

    def test_rotate(self):

        for axis, function in zip([1, 2, 3], [rot.rot_x, rot.rot_y, rot.rot_z]):
            matrix = rot.setup_rotate(axis, 0.8)

            np.testing.assert_array_equal(matrix[:3], function(0.8))
            np.testing.assert_array_equal(matrix[3], np.zeros(3))

        with self.assertRaises(rot.InvalidAxisError):
            rot.setup_rotate(0, 0.8)

    def test_rotate_about_vector(self):

        axis = np.array([0, 0.6, -0.8])

        matrix = rot.setup_rotate_about_vector(axis, 1.4)

        np.testing.assert_array_almost_equal(matrix[:3], rot.rot_about_vector(axis, 1.4))
        np.testing.assert_array_equal(matrix[3], np.zeros(3))

        with self.assertRaises(rot.NotUnitVectorError) as context:
            rot.setup_rotate_about_vector([0, 0, 2], 1.0)

        np.testing.assert_array_equal(context.exception.fallback, rot.affine_identity())

    def test_from_quaternion(self):

        quaternion = rot.quaternion_normalize([0.5, 0.1, -0.7, 0.2])

        matrix = rot.setup_from_quaternion(quaternion)

        np.testing.assert_array_almost_equal(matrix[:3], rot.quaternion_to_rotmat(quaternion))
        np.testing.assert_array_equal(matrix[3], np.zeros(3))

    def test_scale(self):

        matrix = rot.setup_scale([2, 3, 4])

        np.testing.assert_array_equal(rot.affine_transform_point([1, 1, 1], matrix), [2, 3, 4])
        self.assertAlmostEqual(rot.affine_determinant(matrix), 24)

    def test_scale_along_axis(self):

        axis = np.array([1, 1, 0]) / np.sqrt(2)

        matrix = rot.setup_scale_along_axis(axis, 3.0)

        # stretches along the axis and leaves the perpendicular plane alone
        np.testing.assert_array_almost_equal(rot.affine_transform_point(axis, matrix), 3 * axis)
        np.testing.assert_array_almost_equal(rot.affine_transform_point([1, -1, 0], matrix), [1, -1, 0])
        np.testing.assert_array_almost_equal(rot.affine_transform_point([0, 0, 1], matrix), [0, 0, 1])

        self.assertAlmostEqual(rot.affine_determinant(matrix), 3)

        with self.assertRaises(rot.NotUnitVectorError):
            rot.setup_scale_along_axis([1, 1, 0], 3.0)

    def test_shear(self):

        np.testing.assert_array_equal(rot.affine_transform_point([2, 1, 1], rot.setup_shear(1, 0.5, 3)),
                                      [2, 2, 7])
        np.testing.assert_array_equal(rot.affine_transform_point([1, 2, 1], rot.setup_shear(2, 0.5, 3)),
                                      [2, 2, 7])
        np.testing.assert_array_equal(rot.affine_transform_point([1, 1, 2], rot.setup_shear(3, 0.5, 3)),
                                      [2, 7, 2])

        # each case only touches its own row
        for axis in [1, 2, 3]:
            linear = rot.setup_shear(axis, 0.5, 3)[:3]

            untouched = [row for row in range(3) if row != axis - 1]

            np.testing.assert_array_equal(linear[untouched], np.eye(3)[untouched])
            self.assertEqual(rot.affine_determinant(linear), 1)

        with self.assertRaises(rot.InvalidAxisError):
            rot.setup_shear(4, 1, 1)

    def test_project(self):

        normal = np.array([0, 0, 1])

        matrix = rot.setup_project(normal)

        np.testing.assert_array_equal(rot.affine_transform_point([3, 4, 5], matrix), [3, 4, 0])
        self.assertAlmostEqual(rot.affine_determinant(matrix), 0)

        normal = np.array([1, 2, 2]) / 3

        projected = rot.affine_transform_point([1, 5, -2], rot.setup_project(normal))

        self.assertAlmostEqual(projected @ normal, 0)

        with self.assertRaises(rot.NotUnitVectorError):
            rot.setup_project([0, 0, 0.5])

        options = rot.ToleranceOptions(degenerate_policy=DegeneratePolicy.WARN)

        with self.assertWarns(rot.DegenerateInputWarning):
            np.testing.assert_array_equal(rot.setup_project([0, 0, 0.5], options=options), rot.affine_identity())

    def test_reflect(self):

        np.testing.assert_array_equal(rot.affine_transform_point([3, 4, 5], rot.setup_reflect(1)), [-3, 4, 5])
        np.testing.assert_array_equal(rot.affine_transform_point([3, 4, 5], rot.setup_reflect(2)), [3, -4, 5])
        np.testing.assert_array_equal(rot.affine_transform_point([3, 4, 5], rot.setup_reflect(3)), [3, 4, -5])

        # about the plane y = 1
        matrix = rot.setup_reflect(2, 1.0)

        np.testing.assert_array_equal(rot.affine_transform_point([3, 4, 5], matrix), [3, -2, 5])
        np.testing.assert_array_equal(rot.affine_transform_point([3, 1, 5], matrix), [3, 1, 5])

        self.assertEqual(rot.affine_determinant(matrix), -1)

    def test_reflect_through_plane(self):

        normal = np.array([1, 1, 0]) / np.sqrt(2)

        matrix = rot.setup_reflect_through_plane(normal)

        np.testing.assert_array_almost_equal(rot.affine_transform_point([1, 0, 0], matrix), [0, -1, 0])
        np.testing.assert_array_almost_equal(rot.affine_transform_point([1, -1, 4], matrix), [1, -1, 4])
        np.testing.assert_array_equal(matrix[3], np.zeros(3))

        self.assertAlmostEqual(rot.affine_determinant(matrix), -1)

        with self.assertRaises(rot.NotUnitVectorError):
            rot.setup_reflect_through_plane([1, 1, 0])


class TestFrameTransforms(TestCase):

    def test_local_to_parent(self):

        position = np.array([10, -2, 5])
        orientation = rot.euler_to_rotmat(np.pi / 2, 0, 0)

        matrix = rot.setup_local_to_parent(position, orientation)

        # the local origin lands on the position
        np.testing.assert_array_almost_equal(rot.affine_transform_point([0, 0, 0], matrix), position)

        # local forward points along parent right after a quarter turn of heading
        np.testing.assert_array_almost_equal(rot.affine_transform_point([0, 0, 1], matrix), position + [1, 0, 0])

        np.testing.assert_array_almost_equal(rot.position_from_local_to_parent(matrix), position)

    def test_parent_to_local(self):

        position = np.array([10, -2, 5])
        orientation = rot.euler_to_rotmat(0.3, -0.8, 1.9)

        local_to_parent = rot.setup_local_to_parent(position, orientation)
        parent_to_local = rot.setup_parent_to_local(position, orientation)

        np.testing.assert_array_almost_equal(rot.affine_transform_point(position, parent_to_local), np.zeros(3))

        np.testing.assert_array_almost_equal(rot.affine_compose(local_to_parent, parent_to_local),
                                             rot.affine_identity())
        np.testing.assert_array_almost_equal(rot.affine_inverse(local_to_parent), parent_to_local)

        np.testing.assert_array_almost_equal(rot.position_from_parent_to_local(parent_to_local), position)


class TestAffineCompose(TestCase):

    def test_order(self):

        rotate = rot.setup_rotate(3, np.pi / 2)
        translate = rot.setup_translation([1, 0, 0])

        point = np.array([1, 0, 0])

        # rotate then translate
        np.testing.assert_array_almost_equal(
            rot.affine_transform_point(point, rot.affine_compose(rotate, translate)), [1, 1, 0]
        )

        # translate then rotate
        np.testing.assert_array_almost_equal(
            rot.affine_transform_point(point, rot.affine_compose(translate, rotate)), [0, 2, 0]
        )

    def test_matches_sequential(self):

        matrix_a = random_affine(1)
        matrix_b = random_affine(2)

        point = np.array([0.4, -1.3, 2.2])

        np.testing.assert_array_almost_equal(
            rot.affine_transform_point(point, rot.affine_compose(matrix_a, matrix_b)),
            rot.affine_transform_point(rot.affine_transform_point(point, matrix_a), matrix_b)
        )

    def test_associative(self):

        matrices = [random_affine(seed) for seed in [3, 4, 5]]

        np.testing.assert_array_almost_equal(
            rot.affine_compose(rot.affine_compose(matrices[0], matrices[1]), matrices[2]),
            rot.affine_compose(matrices[0], rot.affine_compose(matrices[1], matrices[2]))
        )

    def test_identity(self):

        matrix = random_affine(6)

        np.testing.assert_array_almost_equal(rot.affine_compose(matrix, rot.affine_identity()), matrix)
        np.testing.assert_array_almost_equal(rot.affine_compose(rot.affine_identity(), matrix), matrix)


class TestAffineDeterminant(TestCase):

    def test_determinant(self):

        for seed in range(5):
            matrix = random_affine(seed)

            self.assertAlmostEqual(rot.affine_determinant(matrix), np.linalg.det(matrix[:3]))
            self.assertAlmostEqual(rot.affine_determinant(matrix[:3]), np.linalg.det(matrix[:3]))

        self.assertAlmostEqual(rot.affine_determinant(rot.setup_rotate(2, 0.4)), 1)

        with self.assertRaises(ValueError):
            rot.affine_determinant(np.eye(4))


class TestAffineInverse(TestCase):

    def test_inverse(self):

        for seed in range(5):
            matrix = random_affine(seed)

            inverse = rot.affine_inverse(matrix)

            np.testing.assert_array_almost_equal(rot.affine_compose(matrix, inverse), rot.affine_identity())
            np.testing.assert_array_almost_equal(rot.affine_compose(inverse, matrix), rot.affine_identity())

            np.testing.assert_array_almost_equal(inverse[:3], np.linalg.inv(matrix[:3]))

    def test_rigid(self):

        matrix = rot.affine_compose(rot.setup_rotate(1, 0.7), rot.setup_translation([4, 5, 6]))

        inverse = rot.affine_inverse(matrix)

        np.testing.assert_array_almost_equal(inverse[:3], matrix[:3].T)
        np.testing.assert_array_almost_equal(inverse[3], -np.array([4, 5, 6]) @ matrix[:3].T)

    def test_singular(self):

        singular = rot.setup_project([0, 1, 0])

        with self.assertRaises(rot.SingularMatrixError) as context:
            rot.affine_inverse(singular)

        np.testing.assert_array_equal(context.exception.fallback, rot.affine_identity())

        options = rot.ToleranceOptions(degenerate_policy='warn')

        with self.assertWarns(rot.DegenerateInputWarning):
            np.testing.assert_array_equal(rot.affine_inverse(singular, options=options), rot.affine_identity())

        # a looser threshold treats a tiny scale as singular
        with self.assertRaises(rot.SingularMatrixError):
            rot.affine_inverse(rot.setup_scale([1e-2, 1, 1]), options=rot.ToleranceOptions(singular_determinant=0.1))
