from __future__ import annotations

from ..config import ESLINT_PACKAGES, ESLINT_TYPESCRIPT_PACKAGES
from ..console import console, done, step
from ..runner import CommandRunner
from ..workspace import Workspace

STAGE = "eslint"

IMPORT_ORDER_RULE = [
    "error",
    {
        "groups": ["builtin", "external", "internal", "parent", "sibling", "index"],
        "newlines-between": "always",
    },
]


def eslint_config(use_typescript: bool) -> dict:
    """Build the ``.eslintrc.json`` payload for a React project."""
    extends = [
        "eslint:recommended",
        "plugin:react/recommended",
        "plugin:react-hooks/recommended",
        "plugin:jsx-a11y/recommended",
        "plugin:import/recommended",
    ]
    plugins = ["react", "react-hooks", "react-refresh", "jsx-a11y", "import"]
    rules: dict = {
        "react-refresh/only-export-components": ["warn", {"allowConstantExport": True}],
        "react/react-in-jsx-scope": "off",
        "react/prop-types": "off",
    }
    settings: dict = {"react": {"version": "detect"}}

    if use_typescript:
        extends.insert(1, "plugin:@typescript-eslint/recommended")
        extends.append("plugin:import/typescript")
        plugins.append("@typescript-eslint")
        rules.update(
            {
                "@typescript-eslint/no-unused-vars": ["error", {"argsIgnorePattern": "^_"}],
                "@typescript-eslint/explicit-function-return-type": "off",
                "@typescript-eslint/explicit-module-boundary-types": "off",
                "@typescript-eslint/no-explicit-any": "warn",
            }
        )
        settings["import/resolver"] = {"typescript": {"alwaysTryTypes": True}}
    else:
        rules["no-unused-vars"] = ["error", {"argsIgnorePattern": "^_"}]
    rules["import/order"] = IMPORT_ORDER_RULE

    config: dict = {
        "root": True,
        "env": {"browser": True, "es2020": True, "node": True},
        "extends": extends,
        "ignorePatterns": ["dist", ".eslintrc.cjs"],
    }
    if use_typescript:
        config["parser"] = "@typescript-eslint/parser"
    config.update(
        {
            "parserOptions": {
                "ecmaVersion": "latest",
                "sourceType": "module",
                "ecmaFeatures": {"jsx": True},
            },
            "plugins": plugins,
            "rules": rules,
            "settings": settings,
        }
    )
    return config


def eslint_scripts(use_typescript: bool) -> dict[str, str]:
    extensions = "ts,tsx" if use_typescript else "js,jsx"
    return {
        "lint": f"eslint . --ext {extensions} --report-unused-disable-directives --max-warnings 0",
        "lint:fix": f"eslint . --ext {extensions} --fix",
    }


def setup_eslint(workspace: Workspace, runner: CommandRunner) -> None:
    step("\nSetting up ESLint...")
    packages = list(ESLINT_PACKAGES)
    if workspace.use_typescript:
        packages.extend(ESLINT_TYPESCRIPT_PACKAGES)
    runner.install(packages, workspace.root, dev=True)

    workspace.write_json(".eslintrc.json", eslint_config(workspace.use_typescript), STAGE)
    workspace.render_stage(STAGE)
    workspace.merge_package_json("scripts", eslint_scripts(workspace.use_typescript), STAGE)

    done("ESLint setup completed")
    console.print("  npm run lint     - Check for linting errors")
    console.print("  npm run lint:fix - Fix auto-fixable linting errors")
