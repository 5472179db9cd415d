"""Domain models shared by the agents, the catalog and the API layer."""

from .catalog import *  # noqa: F401, F403
from .constants import *  # noqa: F401, F403
from .context import *  # noqa: F401, F403
from .feedback import *  # noqa: F401, F403
from .query import *  # noqa: F401, F403
from .response import *  # noqa: F401, F403
