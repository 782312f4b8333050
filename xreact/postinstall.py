"""Install-time hook.

Meant to be wired as a package ``postinstall`` script. It launches the
interactive generator right away when a person is at the terminal, and
otherwise prints how to start it later. Nothing in here may fail the
installation that triggered it.
"""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .config import (
    ENV_AUTO_RUN,
    ENV_CI,
    ENV_FOREGROUND_SCRIPTS,
    ENV_GLOBAL_INSTALL,
    ENV_INIT_CWD,
    ENV_NPM_PREFIX,
)
from .console import console, warn

FALSE_VALUES = {"", "0", "false", "no"}


def _is_set(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() not in FALSE_VALUES


def _under_global_prefix(package_dir: Path, environ: Mapping[str, str]) -> bool:
    """True when the package sits in the global node_modules of the npm prefix."""
    prefix = environ.get(ENV_NPM_PREFIX)
    if not prefix:
        return False
    global_modules = Path(prefix) / "lib" / "node_modules"
    try:
        package_dir.resolve().relative_to(global_modules.resolve())
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class HookEnvironment:
    auto_run_disabled: bool = False
    ci: bool = False
    global_install: bool = False
    foreground_scripts: bool = False
    interactive: bool = False
    init_cwd: Optional[Path] = None

    @classmethod
    def from_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        stdin_is_tty: Optional[bool] = None,
        package_dir: Optional[Path] = None,
    ) -> "HookEnvironment":
        environ = os.environ if environ is None else environ
        package_dir = package_dir or Path(__file__).parent
        if stdin_is_tty is None:
            stdin_is_tty = sys.stdin is not None and sys.stdin.isatty()
        init_cwd = environ.get(ENV_INIT_CWD)
        return cls(
            auto_run_disabled=environ.get(ENV_AUTO_RUN, "").strip().lower() == "false",
            ci=_is_set(environ.get(ENV_CI)),
            global_install=(
                environ.get(ENV_GLOBAL_INSTALL, "").strip().lower() == "true"
                or _under_global_prefix(package_dir, environ)
            ),
            foreground_scripts=environ.get(ENV_FOREGROUND_SCRIPTS, "").strip().lower() == "true",
            interactive=stdin_is_tty,
            init_cwd=Path(init_cwd) if init_cwd else None,
        )


def should_auto_run(env: HookEnvironment) -> bool:
    """Auto-run only for an interactive, local, non-CI install that was not opted out.

    Foreground install scripts count as interactive: the package manager
    hands the terminal to the hook in that mode even when stdin is piped.
    """
    if env.auto_run_disabled or env.ci or env.global_install:
        return False
    return env.interactive or env.foreground_scripts


def print_usage() -> None:
    console.print("\n[bold blue]🚀 XReact installed![/bold blue]")
    console.print("\n[yellow]📋 Usage options:[/yellow]")
    console.print("  1. Run the command:")
    console.print("[cyan]     xreact create[/cyan]")
    console.print("  2. Run the module:")
    console.print("[cyan]     python -m xreact create[/cyan]")
    console.print("  3. Add a single feature to an existing project:")
    console.print("[cyan]     xreact add router[/cyan]")


def launch_generator(cwd: Path) -> int:
    console.print("\n[yellow]▶️  Launching XReact generator now...[/yellow]")
    console.print(f"[dim]   Working directory: {cwd}[/dim]")
    process = subprocess.run([sys.executable, "-m", "xreact", "create"], cwd=cwd, check=False)
    return process.returncode


def run_postinstall(env: Optional[HookEnvironment] = None) -> bool:
    """Run the hook; return True when the generator was launched."""
    try:
        env = env or HookEnvironment.from_environ()
        if env.global_install:
            return False

        print_usage()
        if not should_auto_run(env):
            console.print("\n[dim]ℹ️  Skipping auto-run (non-interactive/CI/global). Use the commands above.[/dim]")
            return False

        return_code = launch_generator(env.init_cwd or Path.cwd())
        if return_code != 0:
            warn("Generator did not complete during install. You can run it later using one of the methods above.")
        return True
    except Exception as error:  # noqa: BLE001
        warn(f"Postinstall script completed with warnings: {error}")
        return False
