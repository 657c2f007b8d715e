import importlib
import os
from typing import Final

from killtree.platform.base import Killer, PlatformOps

__all__ = ["Killer", "PlatformOps", "platform"]

_mod = {"posix": ".posix", "nt": ".windows"}.get(os.name, ".posix")
platform: Final[PlatformOps] = importlib.import_module(_mod, __name__).platform_impl
