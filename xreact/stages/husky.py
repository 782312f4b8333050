from __future__ import annotations

import stat

from ..config import HUSKY_PACKAGES
from ..console import console, done, step, warn
from ..exceptions import XReactError
from ..runner import CommandRunner
from ..workspace import Workspace

STAGE = "husky"

COMMIT_TYPES = (
    ("feat", "New feature"),
    ("fix", "Bug fix"),
    ("docs", "Documentation only changes"),
    ("style", "Changes that do not affect the meaning of the code"),
    ("refactor", "Code change that neither fixes a bug nor adds a feature"),
    ("perf", "Performance improvements"),
    ("test", "Adding missing tests or correcting existing tests"),
    ("chore", "Changes to the build process or auxiliary tools"),
    ("ci", "Changes to CI configuration files and scripts"),
    ("build", "Changes that affect the build system or external dependencies"),
    ("revert", "Reverts a previous commit"),
)

HOOKS = (".husky/pre-commit", ".husky/commit-msg")


def husky_scripts(use_typescript: bool) -> dict[str, str]:
    sources = "src/**/*.{ts,tsx}" if use_typescript else "src/**/*.{js,jsx}"
    return {
        "prepare": "husky install",
        "lint": f"eslint {sources}",
        "lint:fix": f"eslint {sources} --fix",
        "format": "prettier --write src/**/*.{ts,tsx,js,jsx,json,css,md}",
        "format:check": "prettier --check src/**/*.{ts,tsx,js,jsx,json,css,md}",
    }


def lint_staged_config(use_typescript: bool) -> dict[str, list[str]]:
    extensions = "{ts,tsx}" if use_typescript else "{js,jsx}"
    return {
        f"src/**/*.{extensions}": ["eslint --fix", "prettier --write"],
        "src/**/*.{json,css,md}": ["prettier --write"],
    }


def _make_executable(workspace: Workspace, relative: str) -> None:
    path = workspace.path(relative)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def setup_husky(workspace: Workspace, runner: CommandRunner) -> None:
    """Install Husky with lint-staged and commitlint, and write the git hooks."""
    step("\nSetting up Husky and Git hooks...")
    runner.install(HUSKY_PACKAGES, workspace.root, dev=True)

    if not runner.succeeds(["git", "rev-parse", "--git-dir"], workspace.root):
        console.print("[yellow]Initializing Git repository...[/yellow]")
        runner.run(["git", "init"], workspace.root)
    runner.run(["npx", "husky", "install"], workspace.root)

    workspace.render_stage(STAGE, {"commit_types": COMMIT_TYPES})
    for hook in HOOKS:
        _make_executable(workspace, hook)

    workspace.merge_package_json("scripts", husky_scripts(workspace.use_typescript), STAGE)
    workspace.merge_package_json("lint-staged", lint_staged_config(workspace.use_typescript), STAGE)

    try:
        runner.run(["git", "config", "commit.template", ".gitmessage"], workspace.root)
    except XReactError:
        warn("Could not set git commit template. Run manually: git config commit.template .gitmessage")

    done("Husky setup completed")
    console.print("  .husky/pre-commit     - Runs lint-staged before commits")
    console.print("  .husky/commit-msg     - Validates commit messages")
    console.print("  commitlint.config.js  - Conventional commit rules")
    console.print("  .gitmessage           - Commit message template")
