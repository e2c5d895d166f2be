"""
This module provides the :class:`EulerAngles` class for heading-pitch-bank orientations.
"""

import copy

from typing import Iterator

import numpy as np

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY, DIRECTIONS

from posekit.rotations.core.conversions import canonicalize_euler, quaternion_to_euler, rotmat_to_euler
from posekit.rotations.core.tolerances import ToleranceOptions


class EulerAngles:
    """
    A heading-pitch-bank orientation.

    Heading is the rotation about the y (up) axis, pitch about the x (right) axis, and bank about the z (forward) axis,
    all in radians following the left hand rule.  Together they describe the orientation of an object frame in the
    inertial frame: starting aligned with the inertial frame, the object is rotated by heading, then pitch, then bank,
    each about its own (rotated) axis.

    The angles are not kept canonical automatically.  Call :meth:`canonicalize` to reduce them to the canonical set
    (heading and bank in (-pi, pi], pitch in [-pi/2, pi/2], bank 0 in gimbal lock) when a unique representation is
    needed::

        >>> from posekit.rotations import EulerAngles
        >>> from numpy import pi
        >>> angles = EulerAngles(0.0, pi, 0.0)
        >>> angles.canonicalize()
        >>> angles
        EulerAngles(heading=3.141592653589793, pitch=0.0, bank=3.141592653589793)
    """

    def __init__(self, heading: float = 0.0, pitch: float = 0.0, bank: float = 0.0):
        """
        :param heading: The rotation about the y axis in radians
        :param pitch: The rotation about the x axis in radians
        :param bank: The rotation about the z axis in radians
        """

        self.heading: float = float(heading)
        """
        The rotation about the y axis in radians
        """

        self.pitch: float = float(pitch)
        """
        The rotation about the x axis in radians
        """

        self.bank: float = float(bank)
        """
        The rotation about the z axis in radians
        """

    @classmethod
    def identity(cls) -> 'EulerAngles':
        """
        Returns the identity orientation (all angles 0).
        """

        return cls()

    def canonicalize(self, options: ToleranceOptions | None = None):
        """
        Reduces the angles to the canonical set in place.

        See :func:`.canonicalize_euler` for details.

        :param options: The tolerances to use.  If ``None`` the defaults are used
        """

        self.heading, self.pitch, self.bank = canonicalize_euler(self.heading, self.pitch, self.bank,
                                                                 options=options)

    def canonical(self, options: ToleranceOptions | None = None) -> 'EulerAngles':
        """
        Returns a canonical copy of the angles, leaving self untouched.

        :param options: The tolerances to use.  If ``None`` the defaults are used
        """

        return EulerAngles(*canonicalize_euler(self.heading, self.pitch, self.bank, options=options))

    @classmethod
    def from_quaternion(cls, quaternion: ARRAY_LIKE, direction: DIRECTIONS,
                        options: ToleranceOptions | None = None) -> 'EulerAngles':
        """
        Forms euler angles from a rotation quaternion of the given sense.

        See :func:`.quaternion_to_euler` for details.

        :param quaternion: The unit rotation quaternion (an array ``[w, x, y, z]`` or a :class:`.Quaternion`)
        :param direction: The sense of the quaternion
        :param options: The tolerances to use.  If ``None`` the defaults are used
        """

        return cls(*quaternion_to_euler(quaternion, direction=direction, options=options))

    @classmethod
    def from_object_to_inertial_quaternion(cls, quaternion: ARRAY_LIKE,
                                           options: ToleranceOptions | None = None) -> 'EulerAngles':
        """
        Forms euler angles from an object to inertial rotation quaternion.
        """

        return cls.from_quaternion(quaternion, 'object_to_inertial', options=options)

    @classmethod
    def from_inertial_to_object_quaternion(cls, quaternion: ARRAY_LIKE,
                                           options: ToleranceOptions | None = None) -> 'EulerAngles':
        """
        Forms euler angles from an inertial to object rotation quaternion.
        """

        return cls.from_quaternion(quaternion, 'inertial_to_object', options=options)

    @classmethod
    def from_rotation_matrix(cls, matrix: ARRAY_LIKE, options: ToleranceOptions | None = None) -> 'EulerAngles':
        """
        Forms euler angles from an inertial to object rotation matrix (an array or a :class:`.RotationMatrix`).

        See :func:`.rotmat_to_euler` for details.
        """

        return cls(*rotmat_to_euler(matrix, direction='inertial_to_object', options=options))

    @classmethod
    def from_object_to_world_matrix(cls, matrix: ARRAY_LIKE, options: ToleranceOptions | None = None) -> 'EulerAngles':
        """
        Forms euler angles from the linear block of an object to world (local to parent) transform.

        The transform can be a 4x3 array, a 3x3 array, or an :class:`.AffinePose`.  The translation is ignored and the
        linear block is assumed to be orthonormal.
        """

        return cls(*rotmat_to_euler(matrix, direction='object_to_inertial', options=options))

    @classmethod
    def from_world_to_object_matrix(cls, matrix: ARRAY_LIKE, options: ToleranceOptions | None = None) -> 'EulerAngles':
        """
        Forms euler angles from the linear block of a world to object (parent to local) transform.

        The transform can be a 4x3 array, a 3x3 array, or an :class:`.AffinePose`.  The translation is ignored and the
        linear block is assumed to be orthonormal.
        """

        return cls(*rotmat_to_euler(matrix, direction='inertial_to_object', options=options))

    def copy(self) -> 'EulerAngles':
        """
        Returns a copy of self.
        """

        return copy.copy(self)

    def __iter__(self) -> Iterator[float]:
        yield self.heading
        yield self.pitch
        yield self.bank

    def __array__(self, dtype=None, copy=None) -> DOUBLE_ARRAY:
        return np.array([self.heading, self.pitch, self.bank], dtype=dtype)

    def __eq__(self, other) -> bool:

        if not isinstance(other, EulerAngles):
            return NotImplemented

        return (self.heading, self.pitch, self.bank) == (other.heading, other.pitch, other.bank)

    def __repr__(self) -> str:
        return 'EulerAngles(heading={0!r}, pitch={1!r}, bank={2!r})'.format(self.heading, self.pitch, self.bank)
