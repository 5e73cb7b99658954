from __future__ import annotations

from typing import Iterable

from .config import AuthorsConfig
from .models import Contribution

FORMATS = ("plain", "markdown")


def github_cell(login: str) -> str:
    if not login:
        return ""
    return f"[@{login}](https://github.com/{login})"


def render_plain(contributions: Iterable[Contribution], config: AuthorsConfig) -> str:
    lines: list[str] = []
    lines.append(f"# This is the official list of {config.project} authors for copyright purposes.")
    lines.append("")
    lines.append("# This file is automatically generated by")
    lines.append(f"# {config.generator}.  Items are automatically added by")
    lines.append("# git shortlog -sne.  Please add rules to .mailmap to keep it")
    lines.append('# canonical (see "MAPPING AUTHORS" section of git help shortlog for')
    lines.append("# the notation of the rules).")
    lines.append("")
    lines.append("# Individual Persons")
    lines.append("")
    for c in contributions:
        lines.append(f"{c.name} <{c.email}>")
    lines.append("")
    lines.append("## Organizations")
    lines.append("")
    lines.append(config.organization_name)
    return "\n".join(lines) + "\n"


def render_markdown(contributions: Iterable[Contribution], config: AuthorsConfig) -> str:
    lines: list[str] = []
    lines.append(f"<!-- DO NOT MODIFY : this file is automatically generated by {config.generator} -->")
    lines.append("")
    lines.append("# Authors")
    lines.append("")
    lines.append(f"This is the official list of {config.project} authors for copyright purposes.")
    lines.append("")
    lines.append("## Individual Persons")
    lines.append("")
    lines.append("|Name |E-mail  |GitHub|Commits |")
    lines.append("|:----|:-------|:-----|-------:|")
    for c in contributions:
        lines.append(f"|{c.name}|<{c.email}>|{github_cell(c.login)}|{c.commits}|")
    lines.append("")
    lines.append(
        "Items are automatically added by `git shortlog -sne`.  "
        "Please add rules to [`.mailmap`](.mailmap) to keep it canonical "
        '(see "MAPPING AUTHORS" section of `git help shortlog` for the notation of the rules).  '
        "E-mail field must match your public E-mail setting on your GitHub account "
        "if you wish to show your GitHub account name."
    )
    lines.append("")
    lines.append("## Organizations")
    lines.append("")
    lines.append(f"- [{config.organization_name}]({config.organization_url})")
    lines.append("")
    return "\n".join(lines) + "\n"


def render(contributions: Iterable[Contribution], fmt: str, config: AuthorsConfig) -> str:
    if fmt == "markdown":
        return render_markdown(contributions, config)
    return render_plain(contributions, config)
