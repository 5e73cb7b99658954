from __future__ import annotations

import re
from typing import Iterable

from .config import AuthorsConfig
from .models import Contribution

# `.mailmap` entries carry no count: "Name <email>".
MAILMAP_LINE = re.compile(r"^()([^<]*) +<([^>]*)>$")
# `git shortlog -sne` entries: "<count>\t<name> <<email>>".
SHORTLOG_LINE = re.compile(r"^([0-9]+)\t([^<]*) +<([^>]*)>$")


def parse_contribution(pattern: re.Pattern[str], line: str, config: AuthorsConfig) -> Contribution | None:
    line = line.strip()
    if not line:
        return None
    m = pattern.match(line)
    if m is None:
        return None

    count, name, email = m.group(1), m.group(2), m.group(3)
    if email == config.bot_email:
        return None

    if count:
        try:
            commits = int(count)
        except ValueError:
            return None
    else:
        commits = config.seed_commits(email)
    return Contribution(name=name, email=email, commits=commits)


def aggregate(mailmap_lines: Iterable[str], shortlog_lines: Iterable[str], config: AuthorsConfig) -> list[Contribution]:
    """
    Merge `.mailmap` seeds and shortlog entries into one contribution per email.

    Mailmap lines only survive when their email has seeded commits; the first
    such line wins. Shortlog counts are added to an existing entry (keeping its
    name) or start a new one.
    """
    contributions: dict[str, Contribution] = {}

    for line in mailmap_lines:
        c = parse_contribution(MAILMAP_LINE, line, config)
        if c is None or c.commits <= 0:
            continue
        if c.email not in contributions:
            contributions[c.email] = c

    for line in shortlog_lines:
        c = parse_contribution(SHORTLOG_LINE, line, config)
        if c is None or c.commits <= 0:
            continue
        existing = contributions.get(c.email)
        if existing is not None:
            existing.commits += c.commits
        else:
            contributions[c.email] = c

    return list(contributions.values())


def sort_contributions(items: Iterable[Contribution]) -> list[Contribution]:
    return sorted(items, key=lambda c: (-c.commits, c.email))
