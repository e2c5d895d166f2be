"""
This module provides the :class:`Quaternion` class, the value type for unit rotation quaternions.
"""

from typing import Iterable, Self

import copy

import numpy as np

from posekit.rotations.core._helpers import _check_axis_index, _check_quaternion_array_and_shape
from posekit.rotations.core.conversions import euler_to_quaternion, rotmat_to_quaternion
from posekit.rotations.core.quaternion_math import (quaternion_identity, quaternion_rot_x, quaternion_rot_y,
                                                    quaternion_rot_z, quaternion_from_axis_angle, quaternion_dot,
                                                    quaternion_magnitude, quaternion_multiplication,
                                                    quaternion_normalize, quaternion_conjugate, quaternion_inverse,
                                                    quaternion_difference, quaternion_rotation_angle,
                                                    quaternion_rotation_axis, quaternion_power, nlerp, slerp)
from posekit.rotations.core.tolerances import ToleranceOptions
from posekit.rotations.euler_angles import EulerAngles

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY, DIRECTIONS, AXIS_INDEX, DatetimeLike


def _euler_triple(angles: EulerAngles | Iterable[float]) -> tuple[float, float, float]:
    heading, pitch, bank = angles
    return float(heading), float(pitch), float(bank)


class Quaternion:
    """
    A rotation quaternion ``[w, x, y, z]``.

    The :class:`Quaternion` class wraps a length 4 numpy array and provides the rotation operations on it as methods
    and overloaded operators.  Multiplication concatenates rotations in the order they are applied, so that ``a * b``
    is the rotation that performs ``a`` and then ``b``::

        >>> from posekit.rotations import Quaternion
        >>> from numpy import pi
        >>> yaw = Quaternion.about_y(pi/2)
        >>> roll = Quaternion.about_z(pi/2)
        >>> yaw_then_roll = yaw * roll

    Rotation quaternions are expected to be unit length.  Nothing here forces that on construction, but
    :meth:`normalize` restores it in place after drift from repeated concatenation.  The equality operator checks that
    the components are exactly equal, so ``q`` and ``-q`` (which represent the same orientation) compare unequal.
    """

    def __init__(self, data: ARRAY_LIKE | Self | None = None):
        """
        :param data: The quaternion ``[w, x, y, z]`` or another :class:`Quaternion` to copy.  If ``None`` the identity
                     is used
        """

        if data is None:
            self._quaternion = quaternion_identity()

        else:
            self._quaternion = _check_quaternion_array_and_shape(data)

    @property
    def array(self) -> DOUBLE_ARRAY:
        """
        A copy of the quaternion components as a numpy array ``[w, x, y, z]``.

        This property is read only.
        """

        return self._quaternion.copy()

    @property
    def w(self) -> float:
        """
        The scalar component of the quaternion.
        """

        return float(self._quaternion[0])

    @property
    def x(self) -> float:
        return float(self._quaternion[1])

    @property
    def y(self) -> float:
        return float(self._quaternion[2])

    @property
    def z(self) -> float:
        return float(self._quaternion[3])

    @property
    def q_vector(self) -> DOUBLE_ARRAY:
        """
        A copy of the vector portion ``[x, y, z]`` of the quaternion.

        This property is read only.
        """

        return self._quaternion[1:].copy()

    @property
    def q_scalar(self) -> float:
        """
        An alias to :attr:`w`.
        """

        return self.w

    @classmethod
    def identity(cls) -> Self:
        """
        Returns the identity quaternion ``[1, 0, 0, 0]``.
        """

        return cls()

    @classmethod
    def about_x(cls, theta: float) -> Self:
        """
        Returns the quaternion rotating by `theta` radians about the x axis.
        """

        return cls(quaternion_rot_x(theta))

    @classmethod
    def about_y(cls, theta: float) -> Self:
        """
        Returns the quaternion rotating by `theta` radians about the y axis.
        """

        return cls(quaternion_rot_y(theta))

    @classmethod
    def about_z(cls, theta: float) -> Self:
        """
        Returns the quaternion rotating by `theta` radians about the z axis.
        """

        return cls(quaternion_rot_z(theta))

    @classmethod
    def about_principal_axis(cls, axis: AXIS_INDEX, theta: float) -> Self:
        """
        Returns the quaternion rotating by `theta` radians about a principal axis (1 for x, 2 for y, 3 for z).

        :raises InvalidAxisError: if `axis` is not 1, 2, or 3
        """

        return [cls.about_x, cls.about_y, cls.about_z][_check_axis_index(axis) - 1](theta)

    @classmethod
    def about_axis(cls, axis: ARRAY_LIKE, theta: float, options: ToleranceOptions | None = None) -> Self:
        """
        Returns the quaternion rotating by `theta` radians about the unit vector `axis`.

        See :func:`.quaternion_from_axis_angle` for details.
        """

        return cls(quaternion_from_axis_angle(axis, theta, options=options))

    @classmethod
    def from_euler(cls, angles: EulerAngles | Iterable[float], direction: DIRECTIONS) -> Self:
        """
        Returns the quaternion of the given sense for a heading-pitch-bank orientation.

        :param angles: The orientation as :class:`.EulerAngles` or a ``(heading, pitch, bank)`` sequence
        :param direction: The sense of the quaternion to form
        """

        return cls(euler_to_quaternion(*_euler_triple(angles), direction=direction))

    @classmethod
    def object_to_inertial(cls, angles: EulerAngles | Iterable[float]) -> Self:
        """
        Returns the object to inertial quaternion for a heading-pitch-bank orientation.
        """

        return cls.from_euler(angles, 'object_to_inertial')

    @classmethod
    def inertial_to_object(cls, angles: EulerAngles | Iterable[float]) -> Self:
        """
        Returns the inertial to object quaternion for a heading-pitch-bank orientation.
        """

        return cls.from_euler(angles, 'inertial_to_object')

    @classmethod
    def from_rotation_matrix(cls, matrix: ARRAY_LIKE, direction: DIRECTIONS = 'inertial_to_object') -> Self:
        """
        Returns the quaternion of the given sense for an inertial to object rotation matrix.

        See :func:`.rotmat_to_quaternion` for details.
        """

        return cls(rotmat_to_quaternion(matrix, direction=direction))

    def normalize(self, options: ToleranceOptions | None = None):
        """
        Rescales self to unit length in place.

        :raises DegenerateQuaternionError: if self has (nearly) zero length and the policy is to raise
        """

        self._quaternion = quaternion_normalize(self._quaternion, options=options)

    def magnitude(self) -> float:
        """
        Returns the Euclidean length of the quaternion.
        """

        return quaternion_magnitude(self._quaternion)

    def dot(self, other: ARRAY_LIKE | Self) -> float:
        """
        Returns the 4 dimensional dot product of self with `other`.
        """

        return quaternion_dot(self._quaternion, other)

    def conjugate(self) -> Self:
        """
        Returns the conjugate of self as a new quaternion.
        """

        return type(self)(quaternion_conjugate(self._quaternion))

    def inverse(self, options: ToleranceOptions | None = None) -> Self:
        """
        Returns the inverse of self as a new quaternion.

        See :func:`.quaternion_inverse` for details.
        """

        return type(self)(quaternion_inverse(self._quaternion, options=options))

    def difference(self, other: ARRAY_LIKE | Self, options: ToleranceOptions | None = None) -> Self:
        """
        Returns the rotation that takes self to `other`, so that ``self * self.difference(other) == other``.

        See :func:`.quaternion_difference` for details.
        """

        return type(self)(quaternion_difference(self._quaternion, other, options=options))

    def rotation_angle(self) -> float:
        """
        Returns the rotation angle in [0, 2pi] encoded by the (unit) quaternion.
        """

        return quaternion_rotation_angle(self._quaternion)

    def rotation_axis(self) -> DOUBLE_ARRAY:
        """
        Returns the unit rotation axis encoded by the (unit) quaternion.

        See :func:`.quaternion_rotation_axis` for what happens for the identity.
        """

        return quaternion_rotation_axis(self._quaternion)

    def pow(self, exponent: float, options: ToleranceOptions | None = None) -> Self:
        """
        Returns self raised to `exponent`, which scales the rotation angle about the same axis.

        See :func:`.quaternion_power` for details.
        """

        return type(self)(quaternion_power(self._quaternion, exponent, options=options))

    def to_euler(self, direction: DIRECTIONS = 'object_to_inertial',
                 options: ToleranceOptions | None = None) -> EulerAngles:
        """
        Returns the heading-pitch-bank orientation for self read as a quaternion of the given sense.

        See :func:`.quaternion_to_euler` for details.
        """

        return EulerAngles.from_quaternion(self._quaternion, direction, options=options)

    @classmethod
    def slerp(cls, quaternion0: ARRAY_LIKE | Self, quaternion1: ARRAY_LIKE | Self,
              time: float | DatetimeLike,
              time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
              options: ToleranceOptions | None = None) -> Self:
        """
        Spherically interpolates between two quaternions.

        See :func:`.slerp` for details.
        """

        return cls(slerp(quaternion0, quaternion1, time, time0=time0, time1=time1, options=options))

    @classmethod
    def nlerp(cls, quaternion0: ARRAY_LIKE | Self, quaternion1: ARRAY_LIKE | Self,
              time: float | DatetimeLike,
              time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
              options: ToleranceOptions | None = None) -> Self:
        """
        Linearly interpolates between two quaternions and normalizes the result.

        See :func:`.nlerp` for details.
        """

        return cls(nlerp(quaternion0, quaternion1, time, time0=time0, time1=time1, options=options))

    def copy(self) -> Self:
        """
        Returns a deep copy of self.
        """

        return copy.deepcopy(self)

    def __array__(self, dtype=None, copy=None) -> DOUBLE_ARRAY:
        return np.array(self._quaternion, dtype=dtype)

    def __iter__(self):
        return iter(self._quaternion.tolist())

    def __eq__(self, other) -> bool:

        if not isinstance(other, Quaternion):
            return NotImplemented

        return bool((self._quaternion == other._quaternion).all())

    def __mul__(self, other: Self) -> Self:

        if isinstance(other, Quaternion):
            return type(self)(quaternion_multiplication(self._quaternion, other._quaternion))

        return NotImplemented

    def __pow__(self, exponent: float) -> Self:
        return self.pow(exponent)

    def __neg__(self) -> Self:
        return type(self)(-self._quaternion)

    def __repr__(self) -> str:
        return 'Quaternion({0!r})'.format(self._quaternion)

    def __str__(self) -> str:
        return str(self._quaternion)
