"""Template loading and rendering helpers."""

from __future__ import annotations

import datetime as dt
from importlib import resources
from typing import Mapping

EDITORCONFIG_TEMPLATE = "editorconfig"
README_TEMPLATE = "README.md.tmpl"
LICENSE_TEMPLATES = {
    "MIT": "LICENSE-MIT.tmpl",
    "ISC": "LICENSE-ISC.tmpl",
}


def read_template(name: str) -> str:
    """Read a bundled template file from the package.

    Example:
        >>> "indent_style = tab" in read_template(EDITORCONFIG_TEMPLATE)
        True
    """
    return (
        resources.files("node_bootstrap")
        .joinpath("templates")
        .joinpath(name)
        .read_text(encoding="utf-8")
    )


def render_template(template: str, variables: Mapping[str, str]) -> str:
    """Render a template using a simple {{ key }} substitution.

    Example:
        >>> render_template("# {{ name }}", {"name": "demo"})
        '# demo'
    """
    rendered = template
    for key, value in variables.items():
        rendered = rendered.replace(f"{{{{ {key} }}}}", value)
    return rendered


def render_editorconfig() -> str:
    return read_template(EDITORCONFIG_TEMPLATE)


def _scripts_section(scripts: Mapping[str, str]) -> str:
    if not scripts:
        return ""
    lines = ["", "## Scripts", ""]
    for name in scripts:
        lines.append(f"- `npm run {name}`")
    return "\n".join(lines)


def render_readme(project_name: str, scripts: Mapping[str, str] | None = None) -> str:
    """Render the README for a freshly bootstrapped project.

    Example:
        >>> print(render_readme("demo"), end="")
        # demo
        <BLANKLINE>
        ...
    """
    rendered = render_template(
        read_template(README_TEMPLATE),
        {"name": project_name, "scripts": _scripts_section(scripts or {})},
    )
    return rendered.rstrip() + "\n"


def render_license(
    license_name: str,
    *,
    author: str,
    email: str | None = None,
    year: int | None = None,
) -> str:
    """Render a license file body.

    Raises:
        KeyError: ``license_name`` has no bundled template.
    """
    template = read_template(LICENSE_TEMPLATES[license_name])
    return render_template(
        template,
        {
            "year": str(year or dt.date.today().year),
            "author": author,
            "email": f" <{email}>" if email else "",
        },
    )
