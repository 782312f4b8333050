from __future__ import annotations

import re
from pathlib import Path

APP_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")
DEFAULT_APP_NAME = "my-react-app"

STAGE_ORDER = ("base", "tailwind", "router", "rtk_query", "prettier", "eslint", "husky")

MARKER_FILE = ".xreact.yml"
TSCONFIG_FILE = "tsconfig.json"

VITE_TEMPLATES = {True: "react-swc-ts", False: "react-swc"}

TAILWIND_PACKAGES = ("tailwindcss", "@tailwindcss/vite")
ROUTER_PACKAGES = ("react-router-dom",)
RTK_QUERY_PACKAGES = ("@reduxjs/toolkit", "react-redux")
PRETTIER_PACKAGES = ("prettier",)
ESLINT_PACKAGES = (
    "eslint",
    "eslint-plugin-react",
    "eslint-plugin-react-hooks",
    "eslint-plugin-react-refresh",
    "eslint-plugin-jsx-a11y",
    "eslint-plugin-import",
)
ESLINT_TYPESCRIPT_PACKAGES = ("@typescript-eslint/eslint-plugin", "@typescript-eslint/parser")
HUSKY_PACKAGES = ("husky", "lint-staged", "@commitlint/cli", "@commitlint/config-conventional")

# Environment signals read by the install-time hook.
ENV_AUTO_RUN = "XREACT_AUTO_RUN"
ENV_CI = "CI"
ENV_GLOBAL_INSTALL = "npm_config_global"
ENV_NPM_PREFIX = "npm_config_prefix"
ENV_INIT_CWD = "INIT_CWD"
ENV_FOREGROUND_SCRIPTS = "npm_config_foreground_scripts"
ENV_PACKAGE_MANAGER = "XREACT_PACKAGE_MANAGER"

DEFAULT_PACKAGE_MANAGER = "npm"


def templates_root() -> Path:
    return Path(__file__).resolve().parent / "templates"
