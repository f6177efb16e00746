"""
Built-in convention definitions.

Each module exposes a ``build_*_config()`` factory returning a fresh
``ConventionConfig``; ``BUILTIN_CONVENTIONS`` lists them in registration order.
"""

from .bergen import build_bergen_config
from .dont import build_dont_config
from .gerber import build_gerber_config
from .landy import build_landy_config
from .sayc import build_sayc_config
from .stayman import build_stayman_config

BUILTIN_CONVENTIONS = (
    build_stayman_config,
    build_gerber_config,
    build_bergen_config,
    build_landy_config,
    build_dont_config,
    build_sayc_config,
)

__all__ = [
    "BUILTIN_CONVENTIONS",
    "build_bergen_config",
    "build_dont_config",
    "build_gerber_config",
    "build_landy_config",
    "build_sayc_config",
    "build_stayman_config",
]
