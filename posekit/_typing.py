from typing import Union, Literal
from datetime import datetime
from pandas import Timestamp

import numpy as np
import numpy.typing as npt

DOUBLE_ARRAY = npt.NDArray[np.float64]
ARRAY_LIKE = npt.ArrayLike

DatetimeLike = Union[datetime, Timestamp]

DIRECTIONS = Literal['object_to_inertial', 'inertial_to_object']
"""
The two senses an orientation conversion can be read in.
"""

AXIS_INDEX = Literal[1, 2, 3]
"""
Principal axis selectors (1 is x, 2 is y, 3 is z).
"""
