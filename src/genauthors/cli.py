from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, AuthorsConfig, load_authors_config
from .contributions import aggregate, sort_contributions
from .git import read_mailmap, read_shortlog
from .github import apply_logins, lookup_github_logins
from .render import render


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genauthors",
        description="Generate an AUTHORS file from git shortlog and .mailmap.",
    )
    parser.add_argument("--format", type=str, default="plain", help="The output format (markdown or plain).")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to a JSON config overriding project data (default: {DEFAULT_CONFIG_PATH} if present).",
    )
    parser.add_argument("--mailmap", type=Path, default=Path(".mailmap"), help="Path to the .mailmap file.")
    parser.add_argument("--api-url", type=str, default="", help="Override the GitHub API base URL.")
    parser.add_argument(
        "--ca-bundle",
        type=str,
        default="",
        help="Path to a CA bundle file/dir for HTTPS verification.",
    )
    parser.add_argument("--timeout", type=float, default=30.0, help="Timeout in seconds for each GitHub request.")
    parser.add_argument("--verbose", action="store_true", help="Report failed GitHub lookups on stderr.")
    return parser


def _resolve_config(config_path: Path | None) -> AuthorsConfig:
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None
    elif not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        return load_authors_config(config_path)
    except RuntimeError as e:
        raise SystemExit(str(e)) from e


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = _resolve_config(args.config)

    try:
        shortlog = read_shortlog(Path.cwd())
        mailmap = read_mailmap(args.mailmap)
    except RuntimeError as e:
        raise SystemExit(str(e)) from e

    items = sort_contributions(aggregate(mailmap, shortlog, config))

    if args.format == "markdown":

        def report(batch: list[str], err: Exception) -> None:
            if args.verbose:
                print(f"GitHub lookup skipped for {', '.join(batch)}: {err}", file=sys.stderr)

        logins = lookup_github_logins(
            [c.email for c in items],
            api_url=str(args.api_url or "").strip() or config.api_url,
            token=str(os.environ.get("GITHUB_TOKEN") or ""),
            timeout_s=args.timeout,
            ca_bundle_path=str(args.ca_bundle or ""),
            on_error=report,
        )
        apply_logins(items, logins)

    sys.stdout.write(render(items, args.format, config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
