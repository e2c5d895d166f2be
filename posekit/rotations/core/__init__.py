"""
This module contains fundamental mathematical operations and utilities for rotation and pose calculations.  It has no
dependencies on the class based representations to avoid circular imports.  All functions here are pure mathematical
operations on floats and numpy arrays that can be used as building blocks for the higher level representations.
"""

import posekit.rotations.core.affine_math
import posekit.rotations.core.conversions
import posekit.rotations.core.elementals
import posekit.rotations.core.errors
import posekit.rotations.core.quaternion_math
import posekit.rotations.core.tolerances

from posekit.rotations.core.affine_math import (affine_identity, setup_translation, setup_local_to_parent,
                                                setup_parent_to_local, setup_rotate, setup_rotate_about_vector,
                                                setup_from_quaternion, setup_scale, setup_scale_along_axis,
                                                setup_shear, setup_project, setup_reflect, setup_reflect_through_plane,
                                                affine_compose, affine_determinant, affine_inverse,
                                                affine_transform_point, get_translation,
                                                position_from_local_to_parent, position_from_parent_to_local)

from posekit.rotations.core.conversions import (canonicalize_euler, euler_to_quaternion, euler_to_rotmat,
                                                quaternion_to_euler, quaternion_to_rotmat,
                                                rotmat_to_euler, rotmat_to_quaternion)

from posekit.rotations.core.elementals import (PI_OVER_2, TWO_PI, wrap_pi, safe_acos, rot_x, rot_y, rot_z, rot_axis,
                                              rot_about_vector)

from posekit.rotations.core.errors import (RotationError, NotUnitVectorError, DegenerateQuaternionError,
                                           SingularMatrixError, InvalidAxisError, DegenerateInputWarning)

from posekit.rotations.core.quaternion_math import (IDENTITY_QUATERNION, quaternion_identity, quaternion_rot_x,
                                                    quaternion_rot_y, quaternion_rot_z, quaternion_from_axis_angle,
                                                    quaternion_dot, quaternion_magnitude, quaternion_multiplication,
                                                    quaternion_normalize, quaternion_conjugate, quaternion_inverse,
                                                    quaternion_difference, quaternion_rotation_angle,
                                                    quaternion_rotation_axis, quaternion_power, nlerp, slerp)

from posekit.rotations.core.tolerances import DegeneratePolicy, ToleranceOptions

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
           'DegeneratePolicy', 'ToleranceOptions']
