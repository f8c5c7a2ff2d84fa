# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

# ruff: noqa: F403, F405, I002

from typing import *  # type: ignore

from typing_extensions import *  # type: ignore

# Note: dataclass doesn't always recognize class vars
# if they're re-exported from typing.
# See https://github.com/python/cpython/issues/133956.
del ClassVar  # noqa: F821
