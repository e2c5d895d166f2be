"""
Exceptions and warnings raised by the rotation routines.

Every failure that has a sensible value to continue with (a non-unit axis, a zero length quaternion or a singular
matrix) is reported with a :class:`RotationError` subclass that carries that value in its
:attr:`~RotationError.fallback` attribute.  Callers can either let the error propagate or catch it and keep going with
the fallback::

    >>> from posekit.rotations import quaternion_normalize, DegenerateQuaternionError
    >>> try:
    ...     q = quaternion_normalize([0, 0, 0, 0])
    ... except DegenerateQuaternionError as err:
    ...     q = err.fallback
    >>> q
    array([1., 0., 0., 0.])

The same choice can be made once through the ``degenerate_policy`` of :class:`.ToleranceOptions`, in which case a
:class:`DegenerateInputWarning` is issued and the fallback is returned directly.
"""

from typing import Any


__all__ = ['RotationError', 'NotUnitVectorError', 'DegenerateQuaternionError', 'SingularMatrixError',
           'InvalidAxisError', 'DegenerateInputWarning']


class RotationError(ValueError):
    """
    Base class for recoverable failures of the rotation routines.
    """

    def __init__(self, message: str, fallback: Any = None):
        """
        :param message: A description of what went wrong
        :param fallback: The documented safe value to use in place of the failed result
        """

        super().__init__(message)

        self.fallback = fallback
        """
        The safe value the failed operation would have returned under the ``WARN`` policy.
        """


class NotUnitVectorError(RotationError):
    """
    Raised when an axis or plane normal that must be unit length is not.
    """


class DegenerateQuaternionError(RotationError):
    """
    Raised when a quaternion has (nearly) zero magnitude and cannot be normalized or inverted.
    """


class SingularMatrixError(RotationError):
    """
    Raised when the linear part of a transform has a (nearly) zero determinant and cannot be inverted.
    """


class InvalidAxisError(ValueError):
    """
    Raised when a principal axis selector is not 1, 2, or 3.

    This is a programming error and is never downgraded to a warning.
    """


class DegenerateInputWarning(UserWarning):
    """
    Issued in place of a :class:`RotationError` when the degenerate policy is set to warn.
    """
