import posekit.rotations.core
import posekit.rotations.euler_angles
import posekit.rotations.quaternion
import posekit.rotations.rotation_matrix
import posekit.rotations.affine

from posekit.rotations.core import *
from posekit.rotations.euler_angles import EulerAngles
from posekit.rotations.quaternion import Quaternion
from posekit.rotations.rotation_matrix import RotationMatrix
from posekit.rotations.affine import AffinePose

__all__ = ['affine_identity', 'setup_translation', 'setup_local_to_parent', 'setup_parent_to_local',
           'setup_rotate', 'setup_rotate_about_vector', 'setup_from_quaternion', 'setup_scale',
           'setup_scale_along_axis', 'setup_shear', 'setup_project', 'setup_reflect', 'setup_reflect_through_plane',
           'affine_compose', 'affine_determinant', 'affine_inverse', 'affine_transform_point', 'get_translation',
           'position_from_local_to_parent', 'position_from_parent_to_local',
           'canonicalize_euler', 'euler_to_quaternion', 'euler_to_rotmat',
           'quaternion_to_euler', 'quaternion_to_rotmat', 'rotmat_to_euler', 'rotmat_to_quaternion',
           'PI_OVER_2', 'TWO_PI', 'wrap_pi', 'safe_acos', 'rot_x', 'rot_y', 'rot_z', 'rot_axis', 'rot_about_vector',
           'RotationError', 'NotUnitVectorError', 'DegenerateQuaternionError', 'SingularMatrixError',
           'InvalidAxisError', 'DegenerateInputWarning',
           'IDENTITY_QUATERNION', 'quaternion_identity', 'quaternion_rot_x', 'quaternion_rot_y', 'quaternion_rot_z',
           'quaternion_from_axis_angle', 'quaternion_dot', 'quaternion_magnitude', 'quaternion_multiplication',
           'quaternion_normalize', 'quaternion_conjugate', 'quaternion_inverse', 'quaternion_difference',
           'quaternion_rotation_angle', 'quaternion_rotation_axis', 'quaternion_power', 'nlerp', 'slerp',
           'DegeneratePolicy', 'ToleranceOptions',
           'EulerAngles', 'Quaternion', 'RotationMatrix', 'AffinePose']


r"""
This package defines routines for converting between orientation representations and for building and chaining affine
transforms, as well as the classes that wrap them into value types.

All routines work in a left handed coordinate frame (x right, y up, z forward) and treat vectors as row vectors that are
post multiplied by matrices.  The representations are:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
euler angles       Heading, pitch, and bank in radians: the rotations about the y, x, and z axes applied in that order
                   about the (rotated) object axes.  Canonical angles have heading and bank in :math:`(-\pi, \pi]`,
                   pitch in :math:`[-\pi/2, \pi/2]`, and bank zero when pitch is at :math:`\pm\pi/2` (gimbal lock).
quaternion         A 4 element rotation quaternion :math:`[w, x, y, z]=[\cos(\theta/2), \sin(\theta/2)\hat{\mathbf{n}}]`
                   where :math:`\hat{\mathbf{n}}` is the unit rotation axis and :math:`\theta` the angle.  A quaternion
                   is read either object to inertial or inertial to object; the two are conjugates.  The product
                   ``a * b`` applies ``a`` then ``b``.  :math:`\mathbf{q}` and :math:`-\mathbf{q}` are the same
                   orientation.
rotation matrix    A :math:`3\times 3` orthonormal matrix :math:`\mathbf{M}` taking inertial row vectors to the object
                   frame as :math:`\mathbf{v}\mathbf{M}`.  Its transpose goes back.
affine pose        A :math:`4\times 3` matrix whose first three rows are a linear block :math:`\mathbf{L}` and whose
                   last row is a translation :math:`\mathbf{t}`, transforming points as
                   :math:`\mathbf{p}\mathbf{L}+\mathbf{t}`.
=================  =====================================================================================================

The classes :class:`.EulerAngles`, :class:`.Quaternion`, :class:`.RotationMatrix`, and :class:`.AffinePose` are what
most users will want.  The functions in :mod:`posekit.rotations.core` operate directly on floats and numpy arrays.

Degenerate inputs (a zero length quaternion, a non unit axis, a singular matrix) raise a subclass of
:class:`.RotationError` by default.  Setting ``degenerate_policy`` of :class:`.ToleranceOptions` to ``WARN`` instead
issues a :class:`.DegenerateInputWarning` and returns the documented fallback value.
"""
