import copy
import warnings

import numpy as np

from posekit._typing import ARRAY_LIKE, DOUBLE_ARRAY

from posekit.rotations.core.errors import RotationError, NotUnitVectorError, InvalidAxisError, DegenerateInputWarning
from posekit.rotations.core.tolerances import DegeneratePolicy, ToleranceOptions


def _check_array_and_shape(input: ARRAY_LIKE, shape: tuple[int, ...] | None = None) -> DOUBLE_ARRAY:

    in_shape = np.shape(input)

    if not in_shape:
        raise ValueError('The input must be shaped')

    if shape is not None and in_shape != shape:
        raise ValueError(f'The input must have shape {shape}, got {in_shape}')

    # ensure the value is a float array and break mutability
    return np.array(input, dtype=np.float64)


def _check_quaternion_array_and_shape(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    return _check_array_and_shape(quaternion, shape=(4,))


def _check_vector_array_and_shape(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    return _check_array_and_shape(vector, shape=(3,))


def _check_matrix_array_and_shape(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    return _check_array_and_shape(matrix, shape=(3, 3))


def _check_affine_array_and_shape(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    return _check_array_and_shape(matrix, shape=(4, 3))


def _linear_block(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    # accept either a bare 3x3 block or a full 4x3 affine matrix
    if np.shape(matrix) == (4, 3):
        return _check_affine_array_and_shape(matrix)[:3]

    return _check_matrix_array_and_shape(matrix)


def _get_options(options: ToleranceOptions | None) -> ToleranceOptions:
    if options is None:
        options = ToleranceOptions()

    return options


def _report(error: RotationError, options: ToleranceOptions):
    """
    Raise the error or warn and hand back its fallback depending on the degenerate policy.
    """

    if options.degenerate_policy is DegeneratePolicy.WARN:
        warnings.warn(str(error), DegenerateInputWarning, stacklevel=3)

        return copy.deepcopy(error.fallback)

    raise error


def _is_unit_vector(vector: DOUBLE_ARRAY, options: ToleranceOptions) -> bool:
    return bool(abs(vector @ vector - 1.0) < options.unit_length_tolerance)


def _unit_vector_error(name: str, vector: DOUBLE_ARRAY, fallback) -> NotUnitVectorError:
    return NotUnitVectorError(f'The {name} must be a unit vector, got {vector} with length '
                              f'{np.linalg.norm(vector)}', fallback=fallback)


def _check_axis_index(axis: int) -> int:
    if axis not in (1, 2, 3):
        raise InvalidAxisError(f'The axis index must be 1 (x), 2 (y), or 3 (z), got {axis!r}')

    return int(axis)
