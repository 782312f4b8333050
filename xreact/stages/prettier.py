from __future__ import annotations

from ..config import PRETTIER_PACKAGES
from ..console import done, step
from ..runner import CommandRunner
from ..workspace import Workspace

STAGE = "prettier"

PRETTIER_CONFIG = {
    "semi": True,
    "trailingComma": "es5",
    "singleQuote": True,
    "printWidth": 100,
    "tabWidth": 2,
    "useTabs": False,
    "endOfLine": "lf",
    "arrowParens": "avoid",
    "bracketSpacing": True,
    "jsxSingleQuote": True,
    "quoteProps": "as-needed",
}

PRETTIER_SCRIPTS = {
    "format": 'prettier --write "src/**/*.{js,jsx,ts,tsx,json,css,md}"',
    "format:check": 'prettier --check "src/**/*.{js,jsx,ts,tsx,json,css,md}"',
}


def setup_prettier(workspace: Workspace, runner: CommandRunner) -> None:
    step("\nSetting up Prettier...")
    runner.install(PRETTIER_PACKAGES, workspace.root, dev=True)

    workspace.write_json(".prettierrc", PRETTIER_CONFIG, STAGE)
    workspace.render_stage(STAGE)
    workspace.merge_package_json("scripts", PRETTIER_SCRIPTS, STAGE)
    done("Prettier setup completed")
