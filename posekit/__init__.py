"""
posekit: orientation and pose math for left handed 3D frames.

The :mod:`posekit.rotations` package holds everything: euler angles, rotation quaternions, rotation matrices, and 4x3
affine transforms, along with conversions between them.
"""

import posekit.utilities
import posekit.rotations

__version__ = '1.0.0'
