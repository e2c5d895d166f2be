"""
This module provides the :class:`RotationMatrix` class, an orientation stored as an inertial to object 3x3 matrix.
"""

from typing import Iterable, Self

import copy

import numpy as np

from posekit.rotations.core._helpers import _check_matrix_array_and_shape, _check_vector_array_and_shape
from posekit.rotations.core.conversions import (euler_to_rotmat, quaternion_to_rotmat, rotmat_to_euler,
                                                rotmat_to_quaternion)
from posekit.rotations.core.tolerances import ToleranceOptions
from posekit.rotations.euler_angles import EulerAngles
from posekit.rotations.quaternion import Quaternion

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY


class RotationMatrix:
    """
    An orientation stored as the 3x3 matrix that takes row vectors from the inertial frame to the object frame.

    Vectors are rotated by post multiplication (``v @ M``).  Because the matrix is orthonormal its transpose is its
    inverse, so the same object rotates in both directions::

        >>> from posekit.rotations import RotationMatrix, Quaternion
        >>> import numpy as np
        >>> rotation = RotationMatrix.from_inertial_to_object_quaternion(Quaternion.about_z(np.pi/2))
        >>> rotation.inertial_to_object([1, 0, 0])
        array([0., 1., 0.])
        >>> rotation.object_to_inertial([1, 0, 0])
        array([ 0., -1.,  0.])

    Repeated multiplication slowly erodes orthonormality.  :meth:`orthonormalize` restores it in place.
    """

    def __init__(self, data: ARRAY_LIKE | Self | None = None):
        """
        :param data: The inertial to object 3x3 matrix or another :class:`RotationMatrix` to copy.  If ``None`` the
                     identity is used
        """

        if data is None:
            self._matrix = np.eye(3)
        else:
            self._matrix = _check_matrix_array_and_shape(data)

    @property
    def matrix(self) -> DOUBLE_ARRAY:
        """
        A copy of the inertial to object matrix.
        """

        return self._matrix.copy()

    @classmethod
    def identity(cls) -> Self:
        return cls()

    @classmethod
    def from_euler(cls, angles: EulerAngles | Iterable[float]) -> Self:
        """
        Sets up the matrix for a heading-pitch-bank orientation.

        See :func:`.euler_to_rotmat` for details.

        :param angles: The orientation as :class:`.EulerAngles` or a ``(heading, pitch, bank)`` sequence
        """

        heading, pitch, bank = angles

        return cls(euler_to_rotmat(heading, pitch, bank))

    @classmethod
    def from_inertial_to_object_quaternion(cls, quaternion: ARRAY_LIKE | Quaternion) -> Self:
        """
        Sets up the matrix from an inertial to object rotation quaternion.
        """

        return cls(quaternion_to_rotmat(quaternion, direction='inertial_to_object'))

    @classmethod
    def from_object_to_inertial_quaternion(cls, quaternion: ARRAY_LIKE | Quaternion) -> Self:
        """
        Sets up the matrix from an object to inertial rotation quaternion.
        """

        return cls(quaternion_to_rotmat(quaternion, direction='object_to_inertial'))

    def inertial_to_object(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Rotates a vector from the inertial frame into the object frame (``v @ M``).
        """

        return _check_vector_array_and_shape(vector) @ self._matrix

    def object_to_inertial(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Rotates a vector from the object frame into the inertial frame (``v @ M.T``).
        """

        return _check_vector_array_and_shape(vector) @ self._matrix.T

    def transpose(self) -> Self:
        """
        Returns the transposed (inverse) rotation as a new matrix.
        """

        return type(self)(self._matrix.T)

    def orthonormalize(self):
        """
        Restores orthonormality in place using Gram-Schmidt on the rows.

        The first row keeps its direction, the second is made perpendicular to the first, and the third is rebuilt
        from the first two so that the handedness of the matrix is kept.
        """

        row1 = self._matrix[0] / np.linalg.norm(self._matrix[0])

        row2 = self._matrix[1] - (self._matrix[1] @ row1) * row1
        row2 /= np.linalg.norm(row2)

        row3 = np.cross(row1, row2)
        # rows of a proper rotation satisfy r3 = r1 x r2
        if row3 @ self._matrix[2] < 0:
            row3 = -row3

        self._matrix = np.vstack([row1, row2, row3])

    def determinant(self) -> float:
        return float(np.linalg.det(self._matrix))

    def to_euler(self, options: ToleranceOptions | None = None) -> EulerAngles:
        """
        Returns the heading-pitch-bank orientation the matrix represents.

        See :func:`.rotmat_to_euler` for details.
        """

        return EulerAngles(*rotmat_to_euler(self._matrix, direction='inertial_to_object', options=options))

    def to_inertial_to_object_quaternion(self) -> Quaternion:
        return Quaternion(rotmat_to_quaternion(self._matrix, direction='inertial_to_object'))

    def to_object_to_inertial_quaternion(self) -> Quaternion:
        return Quaternion(rotmat_to_quaternion(self._matrix, direction='object_to_inertial'))

    def copy(self) -> Self:
        """
        Returns a deep copy of self.
        """

        return copy.deepcopy(self)

    def __array__(self, dtype=None, copy=None) -> DOUBLE_ARRAY:
        return np.array(self._matrix, dtype=dtype)

    def __eq__(self, other) -> bool:

        if not isinstance(other, RotationMatrix):
            return NotImplemented

        return bool((self._matrix == other._matrix).all())

    def __mul__(self, other: Self) -> Self:
        # apply self then other
        if isinstance(other, RotationMatrix):
            return type(self)(self._matrix @ other._matrix)

        return NotImplemented

    def __repr__(self) -> str:
        return 'RotationMatrix({0!r})'.format(self._matrix)

    def __str__(self) -> str:
        return str(self._matrix)
