"""Synchronous execution of the package manager and git.

Commands inherit stdin/stdout/stderr so the user sees the raw tool output.
"""

from __future__ import annotations

import os
import platform
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from rich.markup import escape

from .config import DEFAULT_PACKAGE_MANAGER, ENV_PACKAGE_MANAGER
from .console import console
from .exceptions import CommandError, ExecutableNotFoundError


class CommandRunner:
    """Run external commands in a project directory and wait for them."""

    def __init__(self, package_manager: str | None = None) -> None:
        self.package_manager = (
            package_manager or os.environ.get(ENV_PACKAGE_MANAGER) or DEFAULT_PACKAGE_MANAGER
        )

    def _resolve_executable(self, name: str) -> str:
        path = shutil.which(name)
        if path is None:
            raise ExecutableNotFoundError(name)
        return path

    def run(self, args: Sequence[str], cwd: Path) -> None:
        """Execute ``args`` in ``cwd``; raise CommandError on a non-zero exit."""
        command = list(args)
        console.print(f"\n[yellow]Running: {escape(' '.join(command))}[/yellow]")
        executable = self._resolve_executable(command[0])
        process = subprocess.run(
            [executable, *command[1:]],
            cwd=cwd,
            shell=platform.system() == "Windows",
            check=False,
        )
        if process.returncode != 0:
            raise CommandError(command, process.returncode)

    def succeeds(self, args: Sequence[str], cwd: Path) -> bool:
        """Run a check command quietly and report whether it exited with 0."""
        command = list(args)
        try:
            executable = self._resolve_executable(command[0])
        except ExecutableNotFoundError:
            return False
        process = subprocess.run(
            [executable, *command[1:]],
            cwd=cwd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
        return process.returncode == 0

    def install(self, packages: Sequence[str], cwd: Path, dev: bool = False) -> None:
        args = [self.package_manager, "install"]
        if dev:
            args.append("--save-dev")
        self.run([*args, *packages], cwd)

    def create_vite(self, app_name: str, template: str, cwd: Path) -> None:
        self.run([self.package_manager, "create", "vite@latest", app_name, "--", "--template", template], cwd)
