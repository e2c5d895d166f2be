from dataclasses import dataclass, replace

from typing import Dict, Self

from abc import ABCMeta


@dataclass
class UserOptions(metaclass=ABCMeta):
    """
    This is an abstract class used to create a dataclass of user options.

    These options collect the defaults for parameters used inside the associated routines so that they can be changed
    in one place and passed around as a single ``options`` keyword argument.

    Example:
        ToleranceOptions contains the default thresholds for the rotation routines.

    Custom objects built from this abstract class must follow the naming scheme <name>Options.  Subclasses that need to
    check or coerce their values after initialization should implement :meth:`override_options`, which is called at
    the end of ``__init__`` and again by :meth:`replace`.

    for example:
        >>> @dataclass
        >>> class ExampleOptions(UserOptions):
        >>>     example_var : int = 1234
        >>>
        >>>     def override_options(self):
        >>>         if self.example_var < 0:
        >>>             raise ValueError('example_var must be non-negative')

        >>> options = ExampleOptions()
        >>> options.replace(example_var=42).options_dict
        ...     {'example_var': 42}
    """

    def __post_init__(self):
        self.override_options()

    def override_options(self):
        '''
        This method is used for special cases when certain options should be validated or overwritten
        '''
        pass

    def replace(self, **changes) -> Self:
        """
        Returns a copy of the options with the given fields changed.

        :param changes: The option names and their new values
        :raises ValueError: If one of the names is not an option of this class
        """

        unknown = set(changes) - set(self.__dataclass_fields__)

        if unknown:
            raise ValueError(f'Unknown option(s) for {type(self).__name__}: {sorted(unknown)}')

        return replace(self, **changes)

    @property
    def options_dict(self) -> Dict:
        """
        Determine the options input to the dataclass.

        This property method will ignore all internal properties and functions
        """

        return {key: self.__dict__[key] for key in self.__dataclass_fields__}
