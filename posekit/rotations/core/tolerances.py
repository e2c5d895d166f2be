"""
This module collects the numeric thresholds used by the rotation routines into a single options dataclass.

Every routine that relies on one of these thresholds accepts an ``options`` keyword argument.  If it is left as
``None`` then the defaults below are used.  For instance, to treat slightly larger pitch values as gimbal lock::

    >>> from posekit.rotations import ToleranceOptions, canonicalize_euler
    >>> options = ToleranceOptions(gimbal_lock_epsilon=1e-3)
    >>> canonicalize_euler(0.1, 1.5705, 0.2, options=options)
    (0.30000000000000004, 1.5705, 0.0)
"""

from dataclasses import dataclass

from enum import Enum, auto

from posekit.utilities.options import UserOptions


__all__ = ['DegeneratePolicy', 'ToleranceOptions']


class DegeneratePolicy(Enum):
    """
    This enumeration selects how precondition violations and degenerate inputs are reported.
    """

    RAISE = auto()
    """
    Raise the corresponding :class:`.RotationError`.  The fallback value is available on the exception.
    """

    WARN = auto()
    """
    Issue a :class:`.DegenerateInputWarning` and return the documented fallback value.
    """


@dataclass
class ToleranceOptions(UserOptions):

    gimbal_lock_epsilon: float = 1e-4
    """
    How close (in radians) pitch may get to +/- pi/2 before :func:`.canonicalize_euler` treats the angles as gimbal
    locked and folds bank into heading.
    """

    gimbal_lock_sine: float = 0.9999
    """
    The magnitude of sin(pitch) above which quaternion and matrix to euler angle conversions use the gimbal lock
    branch.
    """

    slerp_linear_threshold: float = 0.9999
    """
    The cosine of the angle between two quaternions above which :func:`.slerp` falls back to linear weights.
    """

    pow_identity_threshold: float = 0.9999
    """
    The magnitude of the scalar part above which :func:`.quaternion_power` treats a quaternion as the identity.
    """

    unit_length_tolerance: float = 1e-6
    """
    The largest allowed value of ``|n.n - 1|`` for an axis or plane normal that must be unit length.
    """

    zero_magnitude: float = 1e-12
    """
    Quaternions with a magnitude below this are considered zero and cannot be normalized or inverted.
    """

    singular_determinant: float = 1e-6
    """
    Linear blocks with an absolute determinant below this are considered singular and cannot be inverted.
    """

    degenerate_policy: DegeneratePolicy = DegeneratePolicy.RAISE
    """
    What to do when a precondition is violated or a degenerate input is encountered.

    See :class:`DegeneratePolicy` for details.
    """

    def override_options(self):
        """
        Checks the thresholds and converts a string ``degenerate_policy`` (``'raise'`` or ``'warn'``) to the enum.

        :raises ValueError: if a threshold is out of range or the policy is not recognized
        """

        if isinstance(self.degenerate_policy, str):
            try:
                self.degenerate_policy = DegeneratePolicy[self.degenerate_policy.upper()]
            except KeyError:
                raise ValueError(f'degenerate_policy must be one of {[p.name.lower() for p in DegeneratePolicy]}, '
                                 f'got {self.degenerate_policy!r}') from None

        elif not isinstance(self.degenerate_policy, DegeneratePolicy):
            raise ValueError(f'degenerate_policy must be a DegeneratePolicy, got {self.degenerate_policy!r}')

        for name in ('gimbal_lock_sine', 'slerp_linear_threshold', 'pow_identity_threshold'):
            if not 0 < getattr(self, name) <= 1:
                raise ValueError(f'{name} is a cosine or sine threshold and must be in (0, 1], '
                                 f'got {getattr(self, name)}')

        for name in ('gimbal_lock_epsilon', 'unit_length_tolerance', 'zero_magnitude', 'singular_determinant'):
            if getattr(self, name) < 0:
                raise ValueError(f'{name} must be non-negative, got {getattr(self, name)}')
