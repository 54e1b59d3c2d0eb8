"""Question feeds domain: feed contracts, sorting and visibility rules."""

from .models import *  # noqa: F401,F403
from .sorting import *  # noqa: F401,F403
from .feeds import *  # noqa: F401,F403
from .ports import *  # noqa: F401,F403
from .visibility import *  # noqa: F401,F403
