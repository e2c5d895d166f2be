# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains core routines for converting between heading-pitch-bank euler angles, rotation quaternions, and
rotation matrices.  All routines are implemented purely on floats and numpy arrays (or array like objects).

Conversions that involve a direction take a ``direction`` argument that is either ``'inertial_to_object'`` or
``'object_to_inertial'``.  It always names the sense of the quaternion or matrix involved; euler angles always
describe the orientation of the object in the inertial frame.  Rotation matrices produced here are always the
inertial to object matrix (see :ref:`Rotation Representations <rotation-representation-table>`).
"""

import numpy as np

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY, DIRECTIONS

from posekit.rotations.core._helpers import (_check_quaternion_array_and_shape, _check_matrix_array_and_shape,
                                             _linear_block, _get_options)
from posekit.rotations.core.elementals import PI_OVER_2, wrap_pi
from posekit.rotations.core.quaternion_math import quaternion_conjugate
from posekit.rotations.core.tolerances import ToleranceOptions


__all__ = ['canonicalize_euler',
           'euler_to_quaternion', 'euler_to_rotmat',
           'quaternion_to_euler', 'quaternion_to_rotmat',
           'rotmat_to_euler', 'rotmat_to_quaternion']


_DIRECTIONS = ('inertial_to_object', 'object_to_inertial')


def _check_direction(direction: str) -> str:
    fixed_direction = direction.lower()

    if fixed_direction not in _DIRECTIONS:
        raise ValueError(f'direction must be one of {_DIRECTIONS}, got {direction!r}')

    return fixed_direction


def canonicalize_euler(heading: float, pitch: float, bank: float,
                       options: ToleranceOptions | None = None) -> tuple[float, float, float]:
    r"""
    This function reduces heading-pitch-bank euler angles to the canonical set.

    The canonical set has heading and bank in :math:`(-\pi, \pi]` and pitch in :math:`[-\pi/2, \pi/2]`.  Pitch
    values outside of this half range are reflected (:math:`\pi - p` or :math:`-\pi - p`) and :math:`\pi` is added to
    both heading and bank to compensate.

    When pitch is within ``gimbal_lock_epsilon`` of :math:`\pm\pi/2` the angles are in gimbal lock.  Heading and bank
    then rotate about the same physical axis, so bank is added to heading and set to 0.

    The operation is idempotent: canonicalizing canonical angles returns them unchanged.

    :param heading: The rotation about the y axis in radians
    :param pitch: The rotation about the x axis in radians
    :param bank: The rotation about the z axis in radians
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The canonical heading, pitch, and bank
    """

    options = _get_options(options)

    pitch = wrap_pi(pitch)

    # reflect pitch into [-pi/2, pi/2]
    if pitch < -PI_OVER_2:
        pitch = -np.pi - pitch
        heading += np.pi
        bank += np.pi

    elif pitch > PI_OVER_2:
        pitch = np.pi - pitch
        heading += np.pi
        bank += np.pi

    if abs(pitch) > PI_OVER_2 - options.gimbal_lock_epsilon:
        # all rotation about the vertical axis goes into heading
        heading += bank
        bank = 0.0

    else:
        bank = wrap_pi(bank)

    heading = wrap_pi(heading)

    return heading, float(pitch), float(bank)


def _half_angle_terms(heading: float, pitch: float, bank: float) -> tuple[float, float, float, float, float, float]:
    half_heading = heading * 0.5
    half_pitch = pitch * 0.5
    half_bank = bank * 0.5

    return (np.sin(half_heading), np.cos(half_heading),
            np.sin(half_pitch), np.cos(half_pitch),
            np.sin(half_bank), np.cos(half_bank))


def euler_to_quaternion(heading: float, pitch: float, bank: float,
                        direction: DIRECTIONS = 'object_to_inertial') -> DOUBLE_ARRAY:
    r"""
    This function converts heading-pitch-bank euler angles into a rotation quaternion.

    The quaternion is the concatenation of the three half angle rotations, written directly in closed form.  For the
    object to inertial quaternion this is

    .. math::
        \mathbf{q} = \left[\begin{array}{c}
        c_hc_pc_b + s_hs_ps_b \\
        c_hs_pc_b + s_hc_ps_b \\
        -c_hs_ps_b + s_hc_pc_b \\
        -s_hs_pc_b + c_hc_ps_b\end{array}\right]

    where :math:`s_h` and :math:`c_h` are the sine and cosine of half the heading (and similarly for pitch and bank).
    The inertial to object quaternion is its conjugate.

    :param heading: The rotation about the y axis in radians
    :param pitch: The rotation about the x axis in radians
    :param bank: The rotation about the z axis in radians
    :param direction: The sense of the quaternion to form
    :return: The rotation quaternion ``[w, x, y, z]``
    """

    direction = _check_direction(direction)

    sh, ch, sp, cp, sb, cb = _half_angle_terms(heading, pitch, bank)

    quaternion = np.array([ch * cp * cb + sh * sp * sb,
                           ch * sp * cb + sh * cp * sb,
                           -ch * sp * sb + sh * cp * cb,
                           -sh * sp * cb + ch * cp * sb])

    if direction == 'inertial_to_object':
        return quaternion_conjugate(quaternion)

    return quaternion


def euler_to_rotmat(heading: float, pitch: float, bank: float) -> DOUBLE_ARRAY:
    r"""
    This function converts heading-pitch-bank euler angles into the inertial to object rotation matrix.

    The matrix is

    .. math::
        \mathbf{M} = \left[\begin{array}{ccc}
        c_hc_b + s_hs_ps_b & -c_hs_b + s_hs_pc_b & s_hc_p \\
        s_bc_p & c_bc_p & -s_p \\
        -s_hc_b + c_hs_ps_b & s_bs_h + c_hs_pc_b & c_hc_p\end{array}\right]

    where :math:`s_h` and :math:`c_h` are the sine and cosine of heading (and similarly for pitch and bank).  The
    object to inertial matrix is its transpose.

    :param heading: The rotation about the y axis in radians
    :param pitch: The rotation about the x axis in radians
    :param bank: The rotation about the z axis in radians
    :return: The 3x3 inertial to object rotation matrix
    """

    sh, ch = np.sin(heading), np.cos(heading)
    sp, cp = np.sin(pitch), np.cos(pitch)
    sb, cb = np.sin(bank), np.cos(bank)

    return np.array([[ch * cb + sh * sp * sb, -ch * sb + sh * sp * cb, sh * cp],
                     [sb * cp, cb * cp, -sp],
                     [-sh * cb + ch * sp * sb, sb * sh + ch * sp * cb, ch * cp]])


def _gimbal_aware_euler(sin_pitch: float,
                        heading_terms: tuple[float, float],
                        bank_terms: tuple[float, float],
                        locked_heading_terms: tuple[float, float],
                        options: ToleranceOptions) -> tuple[float, float, float]:

    if abs(sin_pitch) > options.gimbal_lock_sine:
        # looking straight up or down, bank is folded into heading
        return wrap_pi(np.arctan2(*locked_heading_terms)), float(np.copysign(PI_OVER_2, sin_pitch)), 0.0

    # the gimbal lock check already bounds the domain of arcsin
    return (wrap_pi(np.arctan2(*heading_terms)),
            float(np.arcsin(sin_pitch)),
            wrap_pi(np.arctan2(*bank_terms)))


def quaternion_to_euler(quaternion: ARRAY_LIKE, direction: DIRECTIONS = 'object_to_inertial',
                        options: ToleranceOptions | None = None) -> tuple[float, float, float]:
    r"""
    This function converts a rotation quaternion to heading-pitch-bank euler angles.

    The sine of pitch is computed from the quaternion components (:math:`-2(yz-wx)` for an object to inertial
    quaternion, :math:`-2(yz+wx)` for an inertial to object quaternion).  If its magnitude is above
    ``gimbal_lock_sine`` we are in gimbal lock: pitch is set to :math:`\pm\pi/2`, bank to 0, and heading absorbs the
    remaining rotation about the vertical axis.  Otherwise heading and bank are recovered with two independent
    arc tangents.

    The returned angles are canonical (away from gimbal lock).

    :param quaternion: The unit rotation quaternion ``[w, x, y, z]``
    :param direction: The sense of the quaternion
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The heading, pitch, and bank in radians
    """

    options = _get_options(options)

    direction = _check_direction(direction)

    w, x, y, z = _check_quaternion_array_and_shape(quaternion)

    if direction == 'object_to_inertial':
        sin_pitch = -2.0 * (y * z - w * x)

        return _gimbal_aware_euler(sin_pitch,
                                   (x * z + w * y, 0.5 - x * x - y * y),
                                   (x * y + w * z, 0.5 - x * x - z * z),
                                   (-x * z + w * y, 0.5 - y * y - z * z),
                                   options)

    sin_pitch = -2.0 * (y * z + w * x)

    return _gimbal_aware_euler(sin_pitch,
                               (x * z - w * y, 0.5 - x * x - y * y),
                               (x * y - w * z, 0.5 - x * x - z * z),
                               (-x * z - w * y, 0.5 - y * y - z * z),
                               options)


def quaternion_to_rotmat(quaternion: ARRAY_LIKE, direction: DIRECTIONS = 'inertial_to_object') -> DOUBLE_ARRAY:
    r"""
    This function converts a unit rotation quaternion into the inertial to object rotation matrix.

    For an inertial to object quaternion the matrix is the row vector matrix that applies the quaternion's rotation:

    .. math::
        \mathbf{M} = \left[\begin{array}{ccc}
        1-2(y^2+z^2) & 2(xy+wz) & 2(xz-wy) \\
        2(xy-wz) & 1-2(x^2+z^2) & 2(yz+wx) \\
        2(xz+wy) & 2(yz-wx) & 1-2(x^2+y^2)\end{array}\right]

    For an object to inertial quaternion the matrix is the transpose of this.  The quaternion should be unit length;
    the result is the same as normalizing first only when it is.

    :param quaternion: The unit rotation quaternion ``[w, x, y, z]``
    :param direction: The sense of the quaternion
    :return: The 3x3 inertial to object rotation matrix
    """

    direction = _check_direction(direction)

    w, x, y, z = _check_quaternion_array_and_shape(quaternion)

    ww = 2.0 * w
    xx = 2.0 * x
    yy = 2.0 * y
    zz = 2.0 * z

    matrix = np.array([[1.0 - yy * y - zz * z, xx * y + ww * z, xx * z - ww * y],
                       [xx * y - ww * z, 1.0 - xx * x - zz * z, yy * z + ww * x],
                       [xx * z + ww * y, yy * z - ww * x, 1.0 - xx * x - yy * y]])

    if direction == 'object_to_inertial':
        return matrix.T.copy()

    return matrix


def rotmat_to_euler(matrix: ARRAY_LIKE, direction: DIRECTIONS = 'inertial_to_object',
                    options: ToleranceOptions | None = None) -> tuple[float, float, float]:
    r"""
    This function converts a rotation matrix to heading-pitch-bank euler angles.

    The matrix is assumed to be orthonormal.  A 4x3 affine matrix is also accepted, in which case the translation row
    is ignored.  For an inertial to object (world to object, parent to local) matrix the sine of pitch is
    :math:`-m_{23}`, heading is :math:`\text{atan2}(m_{13}, m_{33})` and bank is :math:`\text{atan2}(m_{21}, m_{22})`.
    In gimbal lock (sine of pitch above ``gimbal_lock_sine``) bank is 0 and heading is
    :math:`\text{atan2}(-m_{31}, m_{11})`.  An object to inertial matrix is transposed first.

    :param matrix: The rotation matrix (or 4x3 affine matrix)
    :param direction: The sense of the matrix
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The heading, pitch, and bank in radians
    """

    options = _get_options(options)

    direction = _check_direction(direction)

    matrix = _linear_block(matrix)

    if direction == 'object_to_inertial':
        matrix = matrix.T

    return _gimbal_aware_euler(-matrix[1, 2],
                               (matrix[0, 2], matrix[2, 2]),
                               (matrix[1, 0], matrix[1, 1]),
                               (-matrix[2, 0], matrix[0, 0]),
                               options)


def rotmat_to_quaternion(matrix: ARRAY_LIKE, direction: DIRECTIONS = 'inertial_to_object') -> DOUBLE_ARRAY:
    r"""
    This function converts an inertial to object rotation matrix into a rotation quaternion of the requested sense.

    The largest of :math:`|w|, |x|, |y|, |z|` is found from the diagonal of the matrix

    .. math::
        4w^2-1 = m_{11}+m_{22}+m_{33} \qquad 4x^2-1 = m_{11}-m_{22}-m_{33} \\
        4y^2-1 = m_{22}-m_{11}-m_{33} \qquad 4z^2-1 = m_{33}-m_{11}-m_{22}

    and the remaining components are recovered from sums and differences of the off diagonal elements divided by it.
    This avoids dividing by a small component.  The result satisfies
    ``quaternion_to_rotmat(rotmat_to_quaternion(m, d), d) == m`` for any orthonormal ``m``.

    :param matrix: The 3x3 inertial to object rotation matrix
    :param direction: The sense of the quaternion to return
    :return: The unit rotation quaternion ``[w, x, y, z]``
    """

    direction = _check_direction(direction)

    m = _check_matrix_array_and_shape(matrix)

    four_squared_minus_1 = np.array([m[0, 0] + m[1, 1] + m[2, 2],
                                     m[0, 0] - m[1, 1] - m[2, 2],
                                     m[1, 1] - m[0, 0] - m[2, 2],
                                     m[2, 2] - m[0, 0] - m[1, 1]])

    biggest_index = int(np.argmax(four_squared_minus_1))

    biggest_value = np.sqrt(four_squared_minus_1[biggest_index] + 1.0) * 0.5
    multiplier = 0.25 / biggest_value

    w_terms = (m[1, 2] - m[2, 1], m[2, 0] - m[0, 2], m[0, 1] - m[1, 0])
    xy = m[0, 1] + m[1, 0]
    xz = m[2, 0] + m[0, 2]
    yz = m[1, 2] + m[2, 1]

    if biggest_index == 0:
        quaternion = np.array([biggest_value, w_terms[0] * multiplier, w_terms[1] * multiplier,
                               w_terms[2] * multiplier])
    elif biggest_index == 1:
        quaternion = np.array([w_terms[0] * multiplier, biggest_value, xy * multiplier, xz * multiplier])
    elif biggest_index == 2:
        quaternion = np.array([w_terms[1] * multiplier, xy * multiplier, biggest_value, yz * multiplier])
    else:
        quaternion = np.array([w_terms[2] * multiplier, xz * multiplier, yz * multiplier, biggest_value])

    if direction == 'object_to_inertial':
        return quaternion_conjugate(quaternion)

    return quaternion
