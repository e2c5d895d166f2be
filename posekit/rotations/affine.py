"""
This module provides the :class:`AffinePose` class, a 4x3 affine transform with a 3x3 linear block and a translation.

Transforms act on points written as row vectors, ``p @ L + t``, and concatenate left to right with the ``*`` operator:
``a * b`` applies ``a`` and then ``b``.  See :mod:`posekit.rotations.core.affine_math` for the underlying routines.
"""

from typing import Iterable, Self

import copy

import numpy as np

from posekit.rotations.core.affine_math import (affine_identity, setup_translation, setup_local_to_parent,
                                                setup_parent_to_local, setup_rotate, setup_rotate_about_vector,
                                                setup_from_quaternion, setup_scale, setup_scale_along_axis,
                                                setup_shear, setup_project, setup_reflect, setup_reflect_through_plane,
                                                affine_compose, affine_determinant, affine_inverse,
                                                affine_transform_point, get_translation,
                                                position_from_local_to_parent, position_from_parent_to_local)
from posekit.rotations.core._helpers import _check_affine_array_and_shape, _check_vector_array_and_shape
from posekit.rotations.core.conversions import euler_to_rotmat
from posekit.rotations.core.tolerances import ToleranceOptions
from posekit.rotations.euler_angles import EulerAngles
from posekit.rotations.quaternion import Quaternion
from posekit.rotations.rotation_matrix import RotationMatrix

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY, AXIS_INDEX


def _orientation_matrix(orientation: EulerAngles | RotationMatrix | ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Interprets an orientation as an inertial to object rotation matrix.

    :class:`.EulerAngles` and length 3 sequences are read as heading-pitch-bank.  :class:`.RotationMatrix` objects and
    3x3 arrays are used directly.

    :raises ValueError: if the orientation cannot be interpreted
    """

    if isinstance(orientation, EulerAngles):
        return euler_to_rotmat(*orientation)

    numpy_orientation = np.asarray(orientation, dtype=np.float64)

    if numpy_orientation.shape == (3,):
        return euler_to_rotmat(*numpy_orientation)

    elif numpy_orientation.shape == (3, 3):
        return numpy_orientation

    raise ValueError('The specified orientation cannot be interpreted.  It must be EulerAngles, a RotationMatrix, a '
                     'length 3 heading-pitch-bank sequence, or a 3x3 matrix.')


class AffinePose:
    """
    A 4x3 affine transform.

    The first three rows are the linear block and the last row is the translation.  The class wraps the 4x3 array and
    exposes the setup routines as class methods, so that building and chaining transforms reads naturally::

        >>> from posekit.rotations import AffinePose, EulerAngles
        >>> import numpy as np
        >>> object_to_world = AffinePose.local_to_parent([10, 0, 0], EulerAngles(np.pi/2, 0, 0))
        >>> world_to_camera = AffinePose.parent_to_local([0, 5, 0], EulerAngles())
        >>> object_to_camera = object_to_world * world_to_camera

    :meth:`zero_translation` and :meth:`set_translation` modify the transform in place.  Everything else returns a new
    transform.
    """

    def __init__(self, data: ARRAY_LIKE | Self | None = None):
        """
        :param data: The 4x3 affine array or another :class:`AffinePose` to copy.  If ``None`` the identity is used
        """

        if data is None:
            self._matrix = affine_identity()
        else:
            self._matrix = _check_affine_array_and_shape(data)

    @property
    def matrix(self) -> DOUBLE_ARRAY:
        """
        A copy of the full 4x3 array.
        """

        return self._matrix.copy()

    @property
    def linear(self) -> DOUBLE_ARRAY:
        """
        A copy of the 3x3 linear block.
        """

        return self._matrix[:3].copy()

    @property
    def translation(self) -> DOUBLE_ARRAY:
        """
        A copy of the translation row.
        """

        return get_translation(self._matrix)

    @classmethod
    def identity(cls) -> Self:
        return cls()

    @classmethod
    def from_translation(cls, translation: ARRAY_LIKE) -> Self:
        """
        Sets up a pure translation.
        """

        return cls(setup_translation(translation))

    @classmethod
    def local_to_parent(cls, position: ARRAY_LIKE, orientation: EulerAngles | RotationMatrix | ARRAY_LIKE) -> Self:
        """
        Sets up the transform from a local (object) frame into its parent (world) frame.

        :param position: The position of the local origin in the parent frame
        :param orientation: The orientation of the local frame in the parent frame.  See :func:`_orientation_matrix`
        """

        return cls(setup_local_to_parent(position, _orientation_matrix(orientation)))

    @classmethod
    def parent_to_local(cls, position: ARRAY_LIKE, orientation: EulerAngles | RotationMatrix | ARRAY_LIKE) -> Self:
        """
        Sets up the transform from a parent (world) frame into a local (object) frame.

        :param position: The position of the local origin in the parent frame
        :param orientation: The orientation of the local frame in the parent frame.  See :func:`_orientation_matrix`
        """

        return cls(setup_parent_to_local(position, _orientation_matrix(orientation)))

    @classmethod
    def rotation(cls, axis: AXIS_INDEX, theta: float) -> Self:
        """
        Sets up a rotation about a principal axis (1 for x, 2 for y, 3 for z).

        :raises InvalidAxisError: if axis is not 1, 2, or 3
        """

        return cls(setup_rotate(axis, theta))

    @classmethod
    def rotation_about_vector(cls, axis: ARRAY_LIKE, theta: float, options: ToleranceOptions | None = None) -> Self:
        return cls(setup_rotate_about_vector(axis, theta, options=options))

    @classmethod
    def from_quaternion(cls, quaternion: ARRAY_LIKE | Quaternion) -> Self:
        """
        Sets up the rotation of an inertial to object quaternion with no translation.
        """

        return cls(setup_from_quaternion(quaternion))

    @classmethod
    def scale(cls, scale: ARRAY_LIKE) -> Self:
        """
        Sets up a scale along the cardinal axes by the factors ``(kx, ky, kz)``.
        """

        return cls(setup_scale(scale))

    @classmethod
    def scale_along_axis(cls, axis: ARRAY_LIKE, k: float, options: ToleranceOptions | None = None) -> Self:
        return cls(setup_scale_along_axis(axis, k, options=options))

    @classmethod
    def shear(cls, axis: AXIS_INDEX, s: float, t: float) -> Self:
        """
        Sets up a shear where the coordinate along `axis` shears the other two by `s` and `t`.

        See :func:`.setup_shear`.
        """

        return cls(setup_shear(axis, s, t))

    @classmethod
    def projection(cls, normal: ARRAY_LIKE, options: ToleranceOptions | None = None) -> Self:
        """
        Sets up an orthographic projection onto the plane through the origin with unit `normal`.
        """

        return cls(setup_project(normal, options=options))

    @classmethod
    def reflection(cls, axis: AXIS_INDEX, k: float = 0.0) -> Self:
        """
        Sets up a reflection about the plane perpendicular to a principal axis at offset `k`.
        """

        return cls(setup_reflect(axis, k))

    @classmethod
    def reflection_through_plane(cls, normal: ARRAY_LIKE, options: ToleranceOptions | None = None) -> Self:
        return cls(setup_reflect_through_plane(normal, options=options))

    def zero_translation(self):
        """
        Zeros the translation row in place, leaving the linear block untouched.
        """

        self._matrix[3] = 0.0

    def set_translation(self, translation: ARRAY_LIKE):
        """
        Overwrites the translation row in place, leaving the linear block untouched.
        """

        self._matrix[3] = _check_vector_array_and_shape(translation)

    def transform_point(self, point: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Returns ``point @ linear + translation``.
        """

        return affine_transform_point(point, self._matrix)

    def transform_points(self, points: Iterable[ARRAY_LIKE]) -> DOUBLE_ARRAY:
        """
        Transforms each point in a sequence (or the rows of an nx3 array) and returns them as an nx3 array.
        """

        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)

        return points @ self._matrix[:3] + self._matrix[3]

    def compose(self, other: ARRAY_LIKE | Self) -> Self:
        """
        Returns the transform that applies self and then `other`.
        """

        return type(self)(affine_compose(self._matrix, other))

    def determinant(self) -> float:
        """
        Returns the determinant of the linear block.
        """

        return affine_determinant(self._matrix)

    def inverse(self, options: ToleranceOptions | None = None) -> Self:
        """
        Returns the inverse transform.

        See :func:`.affine_inverse` for details.

        :raises SingularMatrixError: if the linear block is (nearly) singular and the policy is to raise
        """

        return type(self)(affine_inverse(self._matrix, options=options))

    def position_from_local_to_parent(self) -> DOUBLE_ARRAY:
        """
        Returns the local origin in parent coordinates, assuming self is a local to parent transform.
        """

        return position_from_local_to_parent(self._matrix)

    def position_from_parent_to_local(self) -> DOUBLE_ARRAY:
        """
        Returns the local origin in parent coordinates, assuming self is a rigid parent to local transform.
        """

        return position_from_parent_to_local(self._matrix)

    def copy(self) -> Self:
        """
        Returns a deep copy of self.
        """

        return copy.deepcopy(self)

    def __array__(self, dtype=None, copy=None) -> DOUBLE_ARRAY:
        return np.array(self._matrix, dtype=dtype)

    def __eq__(self, other) -> bool:

        if not isinstance(other, AffinePose):
            return NotImplemented

        return bool((self._matrix == other._matrix).all())

    def __mul__(self, other: Self) -> Self:

        if isinstance(other, AffinePose):
            return self.compose(other)

        return NotImplemented

    def __repr__(self) -> str:
        return 'AffinePose({0!r})'.format(self._matrix)

    def __str__(self) -> str:
        return str(self._matrix)
