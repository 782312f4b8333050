from __future__ import annotations

from typing import Callable

from ..runner import CommandRunner
from ..workspace import Workspace
from .base import setup_base
from .eslint import setup_eslint
from .husky import setup_husky
from .prettier import setup_prettier
from .router import setup_router
from .rtk_query import setup_rtk_query
from .tailwind import setup_tailwind

StageFn = Callable[[Workspace, CommandRunner], None]

# Keyed in execution order; see config.STAGE_ORDER.
STAGES: dict[str, StageFn] = {
    "base": setup_base,
    "tailwind": setup_tailwind,
    "router": setup_router,
    "rtk_query": setup_rtk_query,
    "prettier": setup_prettier,
    "eslint": setup_eslint,
    "husky": setup_husky,
}

__all__ = [
    "STAGES",
    "StageFn",
    "setup_base",
    "setup_eslint",
    "setup_husky",
    "setup_prettier",
    "setup_router",
    "setup_rtk_query",
    "setup_tailwind",
]
