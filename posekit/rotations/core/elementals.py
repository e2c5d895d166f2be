"""
Elemental rotations and the scalar helpers the rest of the rotation routines are built on.

All matrices in this package act on row vectors (``v @ M``) in a left handed coordinate system where a positive
rotation is clockwise when looking from the positive end of the axis towards the origin.
"""

import numpy as np

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY
from posekit.rotations.core._helpers import (_check_vector_array_and_shape, _check_axis_index, _get_options,
                                             _is_unit_vector, _unit_vector_error, _report)
from posekit.rotations.core.tolerances import ToleranceOptions


__all__ = ["PI_OVER_2", "TWO_PI", "wrap_pi", "safe_acos", "rot_x", "rot_y", "rot_z", "rot_axis", "rot_about_vector"]


PI_OVER_2 = np.pi / 2
"""
A quarter turn in radians.
"""

TWO_PI = 2 * np.pi
"""
A full turn in radians.
"""


def wrap_pi(theta: float) -> float:
    r"""
    This function wraps an angle into the range :math:`(-\pi, \pi]` by adding the appropriate multiple of
    :math:`2\pi`.

    Angles that are already in range are returned untouched so that wrapping is exactly idempotent.

    :param theta: The angle to wrap in radians
    :return: The equivalent angle in :math:`(-\pi, \pi]`
    """

    theta = float(theta)

    if -np.pi < theta <= np.pi:
        return theta

    wrapped = theta - TWO_PI * np.floor((theta + np.pi) / TWO_PI)

    # floor puts -pi on the wrong end of the interval
    if wrapped <= -np.pi:
        wrapped += TWO_PI

    return float(wrapped)


def safe_acos(x: float) -> float:
    """
    This function returns the arc cosine of x after clamping x to [-1, 1].

    This tolerates the small overshoots that floating point error introduces into cosines computed from unit
    quaternions and rotation matrices.

    :param x: The cosine value
    :return: The angle in radians in [0, pi]
    """

    return float(np.arccos(np.clip(x, -1.0, 1.0)))


def rot_x(theta: float) -> DOUBLE_ARRAY:
    r"""
    This function forms the matrix that rotates row vectors about the x axis by angle theta.

    Mathematically this rotation is defined as:

    .. math::
        \mathbf{R}_x(\theta)=\left[\begin{array}{ccc} 1 & 0 & 0 \\
        0 & \text{cos}(\theta) & \text{sin}(\theta) \\
        0 & -\text{sin}(\theta) & \text{cos}(\theta) \end{array}\right]

    :param theta: The angle to rotate by in radians
    :return: The 3x3 rotation matrix
    """

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.array([[1.0, 0.0, 0.0],
                     [0.0, ctheta, stheta],
                     [0.0, -stheta, ctheta]])


def rot_y(theta: float) -> DOUBLE_ARRAY:
    r"""
    This function forms the matrix that rotates row vectors about the y axis by angle theta.

    Mathematically this rotation is defined as:

    .. math::
        \mathbf{R}_y(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & 0 & -\text{sin}(\theta) \\
        0 & 1 & 0 \\
        \text{sin}(\theta) & 0 & \text{cos}(\theta) \end{array}\right]

    :param theta: The angle to rotate by in radians
    :return: The 3x3 rotation matrix
    """

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.array([[ctheta, 0.0, -stheta],
                     [0.0, 1.0, 0.0],
                     [stheta, 0.0, ctheta]])


def rot_z(theta: float) -> DOUBLE_ARRAY:
    r"""
    This function forms the matrix that rotates row vectors about the z axis by angle theta.

    Mathematically this rotation is defined as:

    .. math::
        \mathbf{R}_z(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & \text{sin}(\theta) & 0 \\
        -\text{sin}(\theta) & \text{cos}(\theta) & 0 \\
        0 & 0 & 1 \end{array}\right]

    :param theta: The angle to rotate by in radians
    :return: The 3x3 rotation matrix
    """

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.array([[ctheta, stheta, 0.0],
                     [-stheta, ctheta, 0.0],
                     [0.0, 0.0, 1.0]])


def rot_axis(axis: int, theta: float) -> DOUBLE_ARRAY:
    """
    This function forms the rotation about a principal axis selected by index.

    The axis is specified as 1 for x, 2 for y, or 3 for z.  See :func:`rot_x`, :func:`rot_y`, and :func:`rot_z`.

    :param axis: The axis selector
    :param theta: The angle to rotate by in radians
    :return: The 3x3 rotation matrix
    :raises InvalidAxisError: if axis is not 1, 2, or 3
    """

    return (rot_x, rot_y, rot_z)[_check_axis_index(axis) - 1](theta)


def rot_about_vector(axis: ARRAY_LIKE, theta: float, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function forms the matrix that rotates row vectors about an arbitrary unit axis through the origin.

    This is Rodrigues' rotation formula expanded into closed form for row vectors:

    .. math::
        \mathbf{R} = \text{cos}(\theta)\mathbf{I}_{3\times 3} + (1-\text{cos}(\theta))\hat{\mathbf{n}}\hat{\mathbf{n}}^T
        - \text{sin}(\theta)\left[\hat{\mathbf{n}}\times\right]

    where :math:`\left[\bullet\times\right]` is the skew symmetric cross product matrix.

    :param axis: The unit rotation axis
    :param theta: The angle to rotate by in radians
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The 3x3 rotation matrix
    :raises NotUnitVectorError: if the axis is not unit length (fallback: the identity matrix)
    """

    options = _get_options(options)

    axis = _check_vector_array_and_shape(axis)

    if not _is_unit_vector(axis, options):
        return _report(_unit_vector_error('rotation axis', axis, np.eye(3)), options)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    # the skew term is transposed relative to the column vector form
    skew_t = np.array([[0.0, axis[2], -axis[1]],
                       [-axis[2], 0.0, axis[0]],
                       [axis[1], -axis[0], 0.0]])

    return ctheta * np.eye(3) + (1 - ctheta) * np.outer(axis, axis) + stheta * skew_t
