"""
Core routines for 4x3 affine transformation matrices.

An affine matrix is stored as a 4x3 numpy array.  The first three rows hold the 3x3 linear block and the last row
holds the translation, so that a point (row vector) is transformed as ``p @ m[:3] + m[3]``.  The implied fourth column
is always ``[0, 0, 0, 1]``.  Concatenation therefore reads left to right: :func:`affine_compose` ``(a, b)`` applies
``a`` first and then ``b``.

Every ``setup`` routine zeros the translation unless translation is the point of the transform (a translation, a
local/parent frame change, or a reflection about a plane that does not pass through the origin).
"""

import numpy as np

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY

from posekit.rotations.core._helpers import (_check_vector_array_and_shape, _check_matrix_array_and_shape,
                                             _check_affine_array_and_shape, _check_axis_index, _get_options,
                                             _is_unit_vector, _unit_vector_error, _report)
from posekit.rotations.core.conversions import quaternion_to_rotmat
from posekit.rotations.core.elementals import rot_axis, rot_about_vector
from posekit.rotations.core.errors import SingularMatrixError
from posekit.rotations.core.tolerances import ToleranceOptions


__all__ = ['affine_identity', 'setup_translation', 'setup_local_to_parent', 'setup_parent_to_local',
           'setup_rotate', 'setup_rotate_about_vector', 'setup_from_quaternion', 'setup_scale',
           'setup_scale_along_axis', 'setup_shear', 'setup_project', 'setup_reflect', 'setup_reflect_through_plane',
           'affine_compose', 'affine_determinant', 'affine_inverse', 'affine_transform_point', 'get_translation',
           'position_from_local_to_parent', 'position_from_parent_to_local']


def _assemble(linear: ARRAY_LIKE, translation: ARRAY_LIKE | None = None) -> DOUBLE_ARRAY:
    if translation is None:
        translation = np.zeros(3)

    return np.vstack([linear, translation]).astype(np.float64)


def affine_identity() -> DOUBLE_ARRAY:
    """
    Returns the 4x3 identity transform (identity linear block, zero translation).
    """

    return _assemble(np.eye(3))


def setup_translation(translation: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the transform that only translates by the given vector.
    """

    return _assemble(np.eye(3), _check_vector_array_and_shape(translation))


def setup_local_to_parent(position: ARRAY_LIKE, rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function builds the transform from a local (object) frame to its parent (world) frame.

    The position and orientation describe the local frame in the parent frame.  The orientation is given as the
    inertial to object (parent to local) rotation matrix, so the linear block is its transpose.  The translation is the
    position itself since translation happens after rotation.

    :param position: The position of the local frame origin in the parent frame
    :param rotation_matrix: The 3x3 inertial to object rotation matrix of the local frame
    :return: The 4x3 local to parent transform
    """

    rotation_matrix = _check_matrix_array_and_shape(rotation_matrix)

    return _assemble(rotation_matrix.T, _check_vector_array_and_shape(position))


def setup_parent_to_local(position: ARRAY_LIKE, rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function builds the transform from a parent (world) frame to a local (object) frame.

    The position and orientation describe the local frame in the parent frame.  The linear block is the inertial to
    object rotation matrix unmodified.  Undoing a rotate then translate means translating by the negated position
    first, so the translation row is the negated position rotated by the linear block.

    :param position: The position of the local frame origin in the parent frame
    :param rotation_matrix: The 3x3 inertial to object rotation matrix of the local frame
    :return: The 4x3 parent to local transform
    """

    rotation_matrix = _check_matrix_array_and_shape(rotation_matrix)

    position = _check_vector_array_and_shape(position)

    return _assemble(rotation_matrix, -(position @ rotation_matrix))


def setup_rotate(axis: int, theta: float) -> DOUBLE_ARRAY:
    """
    Returns the transform that rotates about a principal axis (1 for x, 2 for y, 3 for z).

    See :func:`.rot_axis` for the sign conventions.

    :raises InvalidAxisError: if axis is not 1, 2, or 3
    """

    return _assemble(rot_axis(axis, theta))


def setup_rotate_about_vector(axis: ARRAY_LIKE, theta: float, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    """
    Returns the transform that rotates about an arbitrary unit axis through the origin.

    See :func:`.rot_about_vector`.

    :raises NotUnitVectorError: if the axis is not unit length (fallback: the identity transform)
    """

    options = _get_options(options)

    axis = _check_vector_array_and_shape(axis)

    if not _is_unit_vector(axis, options):
        return _report(_unit_vector_error('rotation axis', axis, affine_identity()), options)

    return _assemble(rot_about_vector(axis, theta, options=options))


def setup_from_quaternion(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the transform that applies the rotation of a unit quaternion with zero translation.

    See :func:`.quaternion_to_rotmat`.
    """

    return _assemble(quaternion_to_rotmat(quaternion))


def setup_scale(scale: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the transform that scales independently along the x, y, and z axes.

    For a uniform scale ``k`` use ``[k, k, k]``.
    """

    return _assemble(np.diag(_check_vector_array_and_shape(scale)))


def setup_scale_along_axis(axis: ARRAY_LIKE, k: float, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function returns the transform that scales by k along an arbitrary unit axis through the origin.

    The linear block is :math:`\mathbf{I}_{3\times 3}+(k-1)\hat{\mathbf{n}}\hat{\mathbf{n}}^T`.

    :param axis: The unit axis to scale along
    :param k: The scale factor
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The 4x3 scaling transform
    :raises NotUnitVectorError: if the axis is not unit length (fallback: the identity transform)
    """

    options = _get_options(options)

    axis = _check_vector_array_and_shape(axis)

    if not _is_unit_vector(axis, options):
        return _report(_unit_vector_error('scale axis', axis, affine_identity()), options)

    return _assemble(np.eye(3) + (k - 1.0) * np.outer(axis, axis))


def setup_shear(axis: int, s: float, t: float) -> DOUBLE_ARRAY:
    """
    This function returns a shearing transform.

    The shear is selected by an axis index and each case only touches its own row of the linear block:

    * 1: shear y and z by x (``y += s*x``, ``z += t*x``)
    * 2: shear x and z by y (``x += s*y``, ``z += t*y``)
    * 3: shear x and y by z (``x += s*z``, ``y += t*z``)

    :param axis: The axis doing the shearing
    :param s: The amount of the first shear
    :param t: The amount of the second shear
    :return: The 4x3 shear transform
    :raises InvalidAxisError: if axis is not 1, 2, or 3
    """

    row = _check_axis_index(axis) - 1

    linear = np.eye(3)

    # the two columns other than the shearing axis, in increasing order
    linear[row, [column for column in range(3) if column != row]] = [s, t]

    return _assemble(linear)


def setup_project(normal: ARRAY_LIKE, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function returns the orthographic projection onto a plane through the origin.

    The linear block is :math:`\mathbf{I}_{3\times 3}-\hat{\mathbf{n}}\hat{\mathbf{n}}^T`.

    :param normal: The unit normal of the plane
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The 4x3 projection transform
    :raises NotUnitVectorError: if the normal is not unit length (fallback: the identity transform)
    """

    options = _get_options(options)

    normal = _check_vector_array_and_shape(normal)

    if not _is_unit_vector(normal, options):
        return _report(_unit_vector_error('plane normal', normal, affine_identity()), options)

    return _assemble(np.eye(3) - np.outer(normal, normal))


def setup_reflect(axis: int, k: float = 0.0) -> DOUBLE_ARRAY:
    """
    This function returns the reflection about an axis aligned plane.

    The plane is ``x = k`` for axis 1, ``y = k`` for axis 2, and ``z = k`` for axis 3.  The selected component is
    negated and, since reflecting about a plane that does not contain the origin also moves points, translated by
    ``2k``.

    :param axis: The axis normal to the plane
    :param k: The offset of the plane from the origin
    :return: The 4x3 reflection transform
    :raises InvalidAxisError: if axis is not 1, 2, or 3
    """

    index = _check_axis_index(axis) - 1

    linear = np.eye(3)
    linear[index, index] = -1.0

    translation = np.zeros(3)
    translation[index] = 2.0 * k

    return _assemble(linear, translation)


def setup_reflect_through_plane(normal: ARRAY_LIKE, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function returns the reflection about an arbitrary plane through the origin.

    The linear block is :math:`\mathbf{I}_{3\times 3}-2\hat{\mathbf{n}}\hat{\mathbf{n}}^T` and the translation is zero.

    :param normal: The unit normal of the plane
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The 4x3 reflection transform
    :raises NotUnitVectorError: if the normal is not unit length (fallback: the identity transform)
    """

    options = _get_options(options)

    normal = _check_vector_array_and_shape(normal)

    if not _is_unit_vector(normal, options):
        return _report(_unit_vector_error('plane normal', normal, affine_identity()), options)

    return _assemble(np.eye(3) - 2.0 * np.outer(normal, normal))


def affine_compose(matrix_a: ARRAY_LIKE, matrix_b: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function concatenates two transforms into one that applies a and then b.

    The linear block is the matrix product of the two linear blocks.  The translation of a has to be carried through
    the linear block of b before the translation of b is added.

    :param matrix_a: The transform to apply first
    :param matrix_b: The transform to apply second
    :return: The combined 4x3 transform
    """

    matrix_a = _check_affine_array_and_shape(matrix_a)
    matrix_b = _check_affine_array_and_shape(matrix_b)

    return _assemble(matrix_a[:3] @ matrix_b[:3], matrix_a[3] @ matrix_b[:3] + matrix_b[3])


def affine_determinant(matrix: ARRAY_LIKE) -> float:
    """
    Returns the determinant of the 3x3 linear block by cofactor expansion (the translation does not participate).

    A 3x3 matrix is also accepted.
    """

    m = np.asarray(matrix, dtype=np.float64)

    if m.shape == (4, 3):
        m = m[:3]
    else:
        m = _check_matrix_array_and_shape(m)

    return float(m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1]) +
                 m[0, 1] * (m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2]) +
                 m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0]))


def affine_inverse(matrix: ARRAY_LIKE, options: ToleranceOptions | None = None) -> DOUBLE_ARRAY:
    r"""
    This function inverts a transform using the classical adjugate over determinant method.

    The inverse of the linear block is its adjugate (the transpose of the cofactor matrix) divided by its determinant.
    The translation of the inverse is the negated translation carried through the inverted linear block:
    :math:`\mathbf{t}^{-1}=-\mathbf{t}\mathbf{L}^{-1}`.

    :param matrix: The 4x3 transform to invert
    :param options: The tolerances to use.  If ``None`` the defaults are used
    :return: The inverse 4x3 transform
    :raises SingularMatrixError: if the absolute determinant is below ``singular_determinant`` (fallback: the identity
                                 transform)
    """

    options = _get_options(options)

    m = _check_affine_array_and_shape(matrix)

    determinant = affine_determinant(m)

    if abs(determinant) < options.singular_determinant:
        return _report(SingularMatrixError(f'The linear block is singular (determinant {determinant}) and cannot be '
                                           'inverted', fallback=affine_identity()), options)

    one_over_det = 1.0 / determinant

    adjugate = np.array([[m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1],
                          m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2],
                          m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1]],
                         [m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2],
                          m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
                          m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2]],
                         [m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0],
                          m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1],
                          m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]]])

    linear_inverse = adjugate * one_over_det

    return _assemble(linear_inverse, -(m[3] @ linear_inverse))


def affine_transform_point(point: ARRAY_LIKE, matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the point (row vector) transformed by the 4x3 matrix, ``p @ L + t``.
    """

    matrix = _check_affine_array_and_shape(matrix)

    return _check_vector_array_and_shape(point) @ matrix[:3] + matrix[3]


def get_translation(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the translation row of a 4x3 transform.
    """

    return _check_affine_array_and_shape(matrix)[3]


def position_from_local_to_parent(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the position of the local frame origin in the parent frame from a local to parent transform.

    This is simply the translation.
    """

    return get_translation(matrix)


def position_from_parent_to_local(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the position of the local frame origin in the parent frame from a parent to local transform.

    This is the negated translation multiplied by the transpose of the linear block, which is only valid when the
    linear block is a pure rotation (no scale or shear).
    """

    matrix = _check_affine_array_and_shape(matrix)

    return -(matrix[3] @ matrix[:3].T)
