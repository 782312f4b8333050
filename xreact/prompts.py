from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.prompt import Confirm, Prompt

from .config import DEFAULT_APP_NAME
from .console import console
from .exceptions import ValidationError
from .generator import ProjectConfig, validate_app_name

LANGUAGES = ("typescript", "javascript")

# (config field, question, default) in the order they are asked.
FEATURE_QUESTIONS = (
    ("use_tailwind", "Do you want to use Tailwind CSS?", True),
    ("use_react_router", "Do you want to add React Router DOM?", False),
    ("use_rtk_query", "Do you want to add Redux Toolkit Query?", False),
    ("use_prettier", "Do you want to add Prettier?", False),
    ("use_eslint", "Do you want to add ESLint?", False),
    ("use_husky", "Do you want to add Husky git hooks (lint-staged + commitlint)?", False),
)


def ask_app_name(parent_dir: Path) -> str:
    while True:
        name = Prompt.ask("What is your app name?", default=DEFAULT_APP_NAME, console=console).strip()
        error = validate_app_name(name, parent_dir)
        if error is None:
            return name
        console.print(f"[red]{error}[/red]")


def collect_config(
    parent_dir: Path,
    app_name: Optional[str] = None,
    use_typescript: Optional[bool] = None,
    accept_defaults: bool = False,
    **features: Optional[bool],
) -> ProjectConfig:
    """Ask for every choice that was not supplied up front.

    With ``accept_defaults`` nothing is asked; unset choices take their
    default values.
    """
    if app_name is not None:
        error = validate_app_name(app_name, parent_dir)
        if error:
            raise ValidationError(f"{error}: {app_name!r}")
    elif accept_defaults:
        app_name = DEFAULT_APP_NAME
        error = validate_app_name(app_name, parent_dir)
        if error:
            raise ValidationError(f"{error}: {app_name!r}")
    else:
        app_name = ask_app_name(parent_dir)

    if use_typescript is None:
        if accept_defaults:
            use_typescript = True
        else:
            language = Prompt.ask(
                "Do you want to use TypeScript or JavaScript?",
                choices=list(LANGUAGES),
                default="typescript",
                console=console,
            )
            use_typescript = language == "typescript"

    answers = {}
    for field, question, default in FEATURE_QUESTIONS:
        value = features.get(field)
        if value is None:
            value = default if accept_defaults else Confirm.ask(question, default=default, console=console)
        answers[field] = value

    return ProjectConfig(app_name=app_name, use_typescript=use_typescript, **answers)
