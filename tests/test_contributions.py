from __future__ import annotations

from genauthors.config import AuthorsConfig
from genauthors.contributions import MAILMAP_LINE, SHORTLOG_LINE, aggregate, parse_contribution, sort_contributions
from genauthors.models import Contribution


def _config() -> AuthorsConfig:
    return AuthorsConfig(
        bot_email="bot@example.com",
        initial_commits={"alice@example.com": 40, "carol@example.com": 7},
    )


def test_parse_shortlog_line() -> None:
    c = parse_contribution(SHORTLOG_LINE, "   12\tBob Builder <bob@example.com>  ", _config())
    assert c == Contribution(name="Bob Builder", email="bob@example.com", commits=12)


def test_parse_rejects_malformed_and_empty_lines() -> None:
    cfg = _config()
    assert parse_contribution(SHORTLOG_LINE, "", cfg) is None
    assert parse_contribution(SHORTLOG_LINE, "   \t ", cfg) is None
    assert parse_contribution(SHORTLOG_LINE, "12\tBob Builder bob@example.com", cfg) is None
    assert parse_contribution(SHORTLOG_LINE, "Bob Builder <bob@example.com>", cfg) is None
    assert parse_contribution(MAILMAP_LINE, "Alice <alice@example.com> Old <old@example.com>", cfg) is None


def test_parse_excludes_bot() -> None:
    cfg = _config()
    assert parse_contribution(SHORTLOG_LINE, "99\tBot <bot@example.com>", cfg) is None
    assert parse_contribution(MAILMAP_LINE, "Bot <bot@example.com>", cfg) is None


def test_parse_mailmap_line_uses_seed_commits() -> None:
    cfg = _config()
    c = parse_contribution(MAILMAP_LINE, "Alice Liddell <alice@example.com>", cfg)
    assert c == Contribution(name="Alice Liddell", email="alice@example.com", commits=40)
    unseeded = parse_contribution(MAILMAP_LINE, "Dave <dave@example.com>", cfg)
    assert unseeded is not None
    assert unseeded.commits == 0


def test_parse_keeps_email_case() -> None:
    c = parse_contribution(SHORTLOG_LINE, "1\tEve <Eve@Example.com>", _config())
    assert c is not None
    assert c.email == "Eve@Example.com"


def test_aggregate_adds_log_commits_to_seeded_entry() -> None:
    mailmap = [
        "Alice Liddell <alice@example.com>",
        "Alice Again <alice@example.com>",
        "Dave <dave@example.com>",
        "",
    ]
    shortlog = [
        "     5\tAlice L. <alice@example.com>",
        "     3\tBob <bob@example.com>",
        "     0\tZero <zero@example.com>",
        "   100\tBot <bot@example.com>",
        "",
    ]
    items = {c.email: c for c in aggregate(mailmap, shortlog, _config())}
    assert set(items) == {"alice@example.com", "bob@example.com"}
    assert items["alice@example.com"].commits == 45
    assert items["alice@example.com"].name == "Alice Liddell"
    assert items["bob@example.com"] == Contribution(name="Bob", email="bob@example.com", commits=3)


def test_aggregate_keeps_seeded_entry_missing_from_log() -> None:
    items = aggregate(["Carol <carol@example.com>"], ["2\tBob <bob@example.com>"], _config())
    by_email = {c.email: c.commits for c in items}
    assert by_email == {"carol@example.com": 7, "bob@example.com": 2}


def test_aggregate_sums_duplicate_log_entries() -> None:
    items = aggregate([], ["2\tBob <bob@example.com>", "3\tRobert <bob@example.com>"], _config())
    assert items == [Contribution(name="Bob", email="bob@example.com", commits=5)]


def test_sort_by_commits_then_email() -> None:
    items = [
        Contribution(name="B", email="b@x", commits=5),
        Contribution(name="A", email="a@x", commits=5),
        Contribution(name="C", email="c@x", commits=10),
    ]
    assert [c.email for c in sort_contributions(items)] == ["c@x", "a@x", "b@x"]
