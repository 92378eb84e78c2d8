"""Create App: a multi-step setup flow using every prompt type."""

from __future__ import annotations

import asyncio

import tapline
from tapline import Option

LICENSES = ["MIT", "Apache-2.0", "BSD-3-Clause", "GPL-3.0-only", "MPL-2.0", "Unlicense"]


def suggest_license(text: str) -> list[str]:
    return [name for name in LICENSES if text.lower() in name.lower()]


def validate_name(value: str) -> str | None:
    if not value:
        return "Name is required"
    if " " in value:
        return "Use dashes instead of spaces"
    return None


async def main() -> None:
    tapline.intro("create-app")

    name = await tapline.text(
        "Project name?", placeholder="my-app", validate=validate_name
    )
    if tapline.is_cancel(name):
        tapline.cancel("Operation cancelled")
        return

    language = await tapline.select(
        "Language",
        [
            Option("py", "Python", hint="recommended"),
            Option("go", "Go"),
            Option("rs", "Rust"),
        ],
    )
    if tapline.is_cancel(language):
        tapline.cancel("Operation cancelled")
        return

    license_name = await tapline.autocomplete(
        "License", suggest_license, placeholder="Tab completes", default_value="MIT"
    )
    if tapline.is_cancel(license_name):
        tapline.cancel("Operation cancelled")
        return

    features = await tapline.multiselect(
        "Features",
        [Option("lint", "Linting"), Option("tests", "Tests"), Option("ci", "CI")],
        initial_values=["tests"],
    )
    if tapline.is_cancel(features):
        tapline.cancel("Operation cancelled")
        return

    token = tapline.CancellationToken()
    token.cancel_after(30)
    install = await tapline.confirm("Install dependencies?", cancel_token=token)
    if tapline.is_cancel(install):
        tapline.cancel("No answer, skipping setup")
        return

    tapline.message(
        f"{name.value} ({language.value}, {license_name.value})",
        hint=", ".join(features.value) or "no extra features",
    )
    tapline.outro("Project created", hint=f"cd {name.value}")


if __name__ == "__main__":
    asyncio.run(main())
