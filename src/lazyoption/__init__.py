from .errors import (EmptyValueError, InvalidArgumentError,  # noqa
                     InvalidStateError, OptionError)
from .functions import *  # noqa
from .immutable import Immutable  # noqa
from .lazy import LazyOption  # noqa
from .option import (Nothing, Option, Some, ensure, from_return,  # noqa
                     from_value)
from .protocols import SupportsOption, is_option  # noqa

__version__ = '0.1.0'
