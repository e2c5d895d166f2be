"""
This package provides general purpose utilities used throughout posekit.

Currently this is the :class:`.UserOptions` base class used to collect user configurable settings into dataclasses.
"""

from posekit.utilities.options import UserOptions

__all__ = ['UserOptions']
