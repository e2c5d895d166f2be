"""
Quaternion algebra for rotation quaternions stored scalar first as ``[w, x, y, z]``.

The product convention used throughout this package is that ``quaternion_multiplication(a, b)`` is the rotation that
applies ``a`` first and then ``b``.  This matches the left to right reading of row vector matrices, so that the
matrix of ``a*b`` is ``matrix(a) @ matrix(b)``.

None of these routines renormalize their result unless they say so.  The product of two unit quaternions is only unit
length up to floating point error; use :func:`quaternion_normalize` when drift matters.
"""

import numpy as np

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY, DatetimeLike

from posekit.rotations.core._helpers import (_check_quaternion_array_and_shape, _check_vector_array_and_shape,
                                             _get_options, _is_unit_vector, _unit_vector_error, _report)
from posekit.rotations.core.elementals import safe_acos
from posekit.rotations.core.errors import DegenerateQuaternionError
from posekit.rotations.core.tolerances import ToleranceOptions

__all__ = ["IDENTITY_QUATERNION", "quaternion_identity", "quaternion_rot_x", "quaternion_rot_y", "quaternion_rot_z",
           "quaternion_from_axis_angle", "quaternion_dot", "quaternion_magnitude", "quaternion_multiplication",
           "quaternion_normalize", "quaternion_conjugate", "quaternion_inverse", "quaternion_difference",
           "quaternion_rotation_angle", "quaternion_rotation_axis", "quaternion_power", "nlerp", "slerp"]


IDENTITY_QUATERNION = np.array([1.0, 0.0, 0.0, 0.0])
"""
The identity (no rotation) quaternion.  This array is read only; use :func:`quaternion_identity` for a writable copy.
"""
IDENTITY_QUATERNION.setflags(write=False)


def quaternion_identity() -> DOUBLE_ARRAY:
    """
    Returns a new identity quaternion ``[1, 0, 0, 0]``.
    """

    return IDENTITY_QUATERNION.copy()


def _half_angle_quaternion(theta: float, axis: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    half_theta = theta * 0.5

    return np.hstack([np.cos(half_theta), np.sin(half_theta) * axis])


def quaternion_rot_x(theta: float) -> DOUBLE_ARRAY:
    """
    Returns the quaternion that rotates by theta radians about the x axis.
    """

    return _half_angle_quaternion(theta, np.array([1.0, 0.0, 0.0]))


def quaternion_rot_y(theta: float) -> DOUBLE_ARRAY:
    """
    Returns the quaternion that rotates by theta radians about the y axis.
    """

    return _half_angle_quaternion(theta, np.array([0.0, 1.0, 0.0]))


def quaternion_rot_z(theta: float) -> DOUBLE_ARRAY:
    """
    Returns the quaternion that rotates by theta radians about the z axis.
    """

    return _half_angle_quaternion(theta, np.array([0.0, 0.0, 1.0]))


def quaternion_from_axis_angle(axis: ARRAY_LIKE, theta: float, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function forms the quaternion that rotates by theta about an arbitrary unit axis.

    The quaternion is formed using the half angle formula

    .. math::
        \mathbf{q} = \left[\begin{array}{c}\text{cos}(\frac{\theta}{2}) \\
        \text{sin}(\frac{\theta}{2})\hat{\mathbf{n}}\end{array}\right]

    The axis is not normalized for you.  If it is not unit length (within ``unit_length_tolerance``) this is reported
    as a :class:`.NotUnitVectorError`.

    :param axis: The unit rotation axis
    :param theta: The rotation angle in radians
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The rotation quaternion
    :raises NotUnitVectorError: if the axis is not unit length (fallback: the identity quaternion)
    """

    options = _get_options(options)

    axis = _check_vector_array_and_shape(axis)

    if not _is_unit_vector(axis, options):
        return _report(_unit_vector_error('rotation axis', axis, quaternion_identity()), options)

    return _half_angle_quaternion(theta, axis)


def quaternion_dot(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    """
    Returns the 4 dimensional dot product of two quaternions.

    For unit quaternions this is the cosine of half the angle between the two rotations.
    """

    return float(_check_quaternion_array_and_shape(quaternion_1) @ _check_quaternion_array_and_shape(quaternion_2))


def quaternion_magnitude(quaternion: ARRAY_LIKE) -> float:
    """
    Returns the length of the quaternion.
    """

    return float(np.linalg.norm(_check_quaternion_array_and_shape(quaternion)))


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE, quaternion_2_in: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function performs the quaternion product used to concatenate rotations in this package.

    The product is defined such that the result applies the first rotation and then the second, that is
    ``q_from_A_to_C = quaternion_multiplication(q_from_A_to_B, q_from_B_to_C)``.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\mathbf{q}_2=\left[\begin{array}{c}w_1w_2-\mathbf{v}_1^T\mathbf{v}_2 \\
        w_1\mathbf{v}_2 + w_2\mathbf{v}_1 + \mathbf{v}_2\times\mathbf{v}_1\end{array}\right]

    which is the hamiltonian product with the order of the operands swapped.  The product is not commutative.

    :param quaternion_1_in: The rotation to apply first
    :param quaternion_2_in: The rotation to apply second
    :return: The product of quaternion_1 and quaternion_2 (not renormalized)
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in)

    w1 = quaternion_1[0]
    v1 = quaternion_1[1:]

    w2 = quaternion_2[0]
    v2 = quaternion_2[1:]

    return np.hstack([w1 * w2 - v1 @ v2,
                      w1 * v2 + w2 * v1 + np.cross(v2, v1)])


def quaternion_normalize(quaternion: ARRAY_LIKE, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    """
    Normalizes the quaternion to unit length.

    The sign of the quaternion is left alone (``q`` and ``-q`` stay distinct even though they are the same rotation).

    :param quaternion: the quaternion to normalize
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The normalized quaternion
    :raises DegenerateQuaternionError: if the magnitude is below ``zero_magnitude`` (fallback: the identity quaternion)
    """

    options = _get_options(options)

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    magnitude = np.linalg.norm(work_quaternion)

    if magnitude < options.zero_magnitude:
        return _report(DegenerateQuaternionError(f'Cannot normalize quaternion {work_quaternion} with magnitude '
                                                 f'{magnitude}', fallback=quaternion_identity()), options)

    return work_quaternion / magnitude


def quaternion_conjugate(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the conjugate of the quaternion, which negates the vector portion.

    For a unit quaternion this is the opposite rotation.
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    # negate the vector portion
    quaternion[1:] *= -1

    return quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function provides the multiplicative inverse of a quaternion.

    The inverse is defined such that :math:`\mathbf{q}\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}1&0&0&0\end{array}\right]^T` is the identity quaternion.
    Mathematically this is the conjugate divided by the squared magnitude:

    .. math::
        \mathbf{q}^{-1}=\frac{\mathbf{q}^*}{\left\|\mathbf{q}\right\|^2}

    For a unit quaternion this is identical to :func:`quaternion_conjugate`.

    :param quaternion: The quaternion to be inverted
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: the inverse quaternion
    :raises DegenerateQuaternionError: if the magnitude is below ``zero_magnitude`` (fallback: the identity quaternion)
    """

    options = _get_options(options)

    conjugate = quaternion_conjugate(quaternion)

    magnitude = np.linalg.norm(conjugate)

    if magnitude < options.zero_magnitude:
        return _report(DegenerateQuaternionError(f'Cannot invert quaternion {conjugate} with magnitude {magnitude}',
                                                 fallback=quaternion_identity()), options)

    return conjugate / magnitude ** 2


def quaternion_difference(quaternion_a: ARRAY_LIKE, quaternion_b: ARRAY_LIKE,
                          options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    """
    Returns the rotation that takes orientation a to orientation b.

    This is ``inverse(a) * b`` in the product convention of :func:`quaternion_multiplication`, so that
    ``a * quaternion_difference(a, b)`` is ``b``.

    :param quaternion_a: The starting orientation
    :param quaternion_b: The ending orientation
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The relative rotation
    """

    return quaternion_multiplication(quaternion_inverse(quaternion_a, options=options), quaternion_b)


def quaternion_rotation_angle(quaternion: ARRAY_LIKE) -> float:
    """
    Returns the angle of rotation (in radians, in [0, 2 pi]) represented by a unit quaternion.

    The scalar part is clamped to [-1, 1] before taking the arc cosine.
    """

    return 2 * safe_acos(_check_quaternion_array_and_shape(quaternion)[0])


def quaternion_rotation_axis(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Returns the unit axis of rotation represented by a unit quaternion.

    The axis is recovered by dividing the vector portion by :math:`\text{sin}(\frac{\theta}{2})` where
    :math:`\text{sin}^2(\frac{\theta}{2}) = 1-w^2`.  The axis is undefined for the identity rotation, in which case the
    x axis ``[1, 0, 0]`` is returned.

    :param quaternion: The unit quaternion
    :return: The unit rotation axis
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    sin_half_squared = 1.0 - quaternion[0] ** 2

    if sin_half_squared <= 0.0:
        return np.array([1.0, 0.0, 0.0])

    return quaternion[1:] / np.sqrt(sin_half_squared)


def quaternion_power(quaternion: ARRAY_LIKE, exponent: float, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function raises a unit quaternion to a power, scaling the angle of rotation by the exponent.

    Writing the quaternion as :math:`[\text{cos}(\alpha), \text{sin}(\alpha)\hat{\mathbf{n}}]` the result is

    .. math::
        \mathbf{q}^t = \left[\begin{array}{c}\text{cos}(t\alpha) \\
        \text{sin}(t\alpha)\hat{\mathbf{n}}\end{array}\right]

    Quaternions with :math:`|w|` above ``pow_identity_threshold`` are returned unchanged (as a copy) since their axis
    cannot be recovered reliably.

    :param quaternion: The unit quaternion
    :param exponent: The power to raise the quaternion to
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The quaternion raised to exponent
    """

    options = _get_options(options)

    quaternion = _check_quaternion_array_and_shape(quaternion)

    if abs(quaternion[0]) > options.pow_identity_threshold:
        return quaternion

    alpha = np.arccos(quaternion[0])

    new_alpha = alpha * exponent

    multiplier = np.sin(new_alpha) / np.sin(alpha)

    return np.hstack([np.cos(new_alpha), quaternion[1:] * multiplier])


def _fraction(time: float | DatetimeLike, time0: float | DatetimeLike, time1: float | DatetimeLike) -> float:
    try:
        return float((time - time0) / (time1 - time0))  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division. Typically this means they should all be floats or all be DatetimeLike objects')


def nlerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two vectors, and then normalizing
    the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    where :math:`p` is the fractional percent of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1`.  As
    with :func:`slerp` the ending quaternion is negated first if that gives the shorter arc, and the fraction is clamped
    to [0, 1] with the end points returned exactly.

    The fraction can be given directly as `time`, or `time0` and `time1` can be set to the times of the first and
    second quaternion (floats or datetimes) and `time` will be converted to the fraction for you.

    .. warning::
        NLERP does not interpolate at a constant angular velocity.  Use :func:`slerp` for that.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The fraction (or time between `time0` and `time1`) to interpolate at
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The interpolated unit quaternion
    """

    dt = _fraction(time, time0, time1)

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    if dt <= 0:
        return q0
    elif dt >= 1:
        return q1

    if q0 @ q1 < 0:
        q1 = -q1

    return quaternion_normalize(q0 * (1 - dt) + q1 * dt, options=options)


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP of quaternions involves performing a linear interpolation along the great circle arc connecting the two
    quaternions. That is:

    .. math::
        \text{cos}(\Omega) = \mathbf{q}_0^T\mathbf{q}_1\\
        \mathbf{q}=\frac{\text{sin}((1-p)\Omega)}{\text{sin}(\Omega)}\mathbf{q}_0+
        \frac{\text{sin}(p\Omega)}{\text{sin}(\Omega)}\mathbf{q}_1

    where :math:`\Omega` is the angle between the quaternions and :math:`p` is the fractional percent of the way between
    :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that we want to interpolate at.

    A few details are handled specially:

    * :math:`p\leq 0` returns :math:`\mathbf{q}_0` and :math:`p\geq 1` returns :math:`\mathbf{q}_1` exactly, without
      going through the formula.
    * If the dot product is negative :math:`\mathbf{q}_1` is negated (a local copy, the input is untouched) so that the
      shorter arc is taken.
    * If the cosine is above ``slerp_linear_threshold`` the weights fall back to :math:`1-p` and :math:`p` to avoid
      dividing by a nearly zero sine.

    The result is not renormalized.  Normalize it with :func:`quaternion_normalize` if a strictly unit result is needed.

    The fraction can be given directly as `time`, or `time0` and `time1` can be set to the times of the first and
    second quaternion (floats or datetimes) and `time` will be converted to the fraction for you.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The fraction (or time between `time0` and `time1`) to interpolate at
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The interpolated quaternion
    """

    options = _get_options(options)

    dt = _fraction(time, time0, time1)

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    if dt <= 0:
        return q0
    elif dt >= 1:
        return q1

    cos_omega = q0 @ q1

    if cos_omega < 0:
        # take the shorter arc through the antipodal representative
        q1 = -q1
        cos_omega = -cos_omega

    if cos_omega > options.slerp_linear_threshold:
        k0 = 1.0 - dt
        k1 = dt

    else:
        sin_omega = np.sqrt(1.0 - cos_omega * cos_omega)

        omega = np.arctan2(sin_omega, cos_omega)

        k0 = np.sin((1.0 - dt) * omega) / sin_omega
        k1 = np.sin(dt * omega) / sin_omega

    return q0 * k0 + q1 * k1
