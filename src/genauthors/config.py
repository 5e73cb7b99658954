from __future__ import annotations

import dataclasses
import json
import types
from pathlib import Path
from typing import Mapping

DEFAULT_CONFIG_PATH = Path("genauthors.json")
DEFAULT_API_URL = "https://api.github.com"

# Commits made before the history was published.
DEFAULT_INITIAL_COMMITS: dict[str, int] = {
    "tarao.gnn@gmail.com": 559,
    "shibayu36@gmail.com": 31,
    "hakobe@gmail.com": 28,
    "yuki.tsubo@gmail.com": 25,
    "fly.me.to.the.moon1204@gmail.com": 17,
}


@dataclasses.dataclass(frozen=True)
class AuthorsConfig:
    project: str = "Fireworq"
    organization_name: str = "Hatena Co., Ltd."
    organization_url: str = "http://hatenacorp.jp/"
    generator: str = "genauthors"
    bot_email: str = "fireworq.github@gmail.com"
    initial_commits: Mapping[str, int] = dataclasses.field(
        default_factory=lambda: types.MappingProxyType(dict(DEFAULT_INITIAL_COMMITS))
    )
    api_url: str = DEFAULT_API_URL

    def seed_commits(self, email: str) -> int:
        return int(self.initial_commits.get(email, 0))


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    return json.loads(config_path.read_text(encoding="utf-8"))


def _str_field(data: dict, key: str, default: str) -> str:
    if key not in data:
        return default
    value = data.get(key)
    if not isinstance(value, str):
        raise RuntimeError(f"config field {key!r} must be a string, got: {value!r}")
    return value


def _initial_commits_field(data: dict, default: Mapping[str, int]) -> Mapping[str, int]:
    if "initial_commits" not in data:
        return types.MappingProxyType(dict(default))
    raw = data.get("initial_commits")
    if not isinstance(raw, dict):
        raise RuntimeError(f"config field 'initial_commits' must be an object, got: {raw!r}")
    out: dict[str, int] = {}
    for email, commits in raw.items():
        if isinstance(commits, bool) or not isinstance(commits, int):
            raise RuntimeError(f"initial_commits[{email!r}] must be an integer, got: {commits!r}")
        out[str(email)] = commits
    return types.MappingProxyType(out)


def config_from_dict(data: dict) -> AuthorsConfig:
    """
    Build an `AuthorsConfig` from a decoded JSON object. Missing keys keep their
    defaults; `initial_commits`, when given, replaces the default table.
    """
    if not isinstance(data, dict):
        raise RuntimeError(f"config must be a JSON object, got: {type(data).__name__}")
    d = AuthorsConfig()
    return AuthorsConfig(
        project=_str_field(data, "project", d.project),
        organization_name=_str_field(data, "organization_name", d.organization_name),
        organization_url=_str_field(data, "organization_url", d.organization_url),
        generator=_str_field(data, "generator", d.generator),
        bot_email=_str_field(data, "bot_email", d.bot_email),
        initial_commits=_initial_commits_field(data, d.initial_commits),
        api_url=_str_field(data, "api_url", d.api_url),
    )


def load_authors_config(config_path: Path | None) -> AuthorsConfig:
    if config_path is None:
        return AuthorsConfig()
    try:
        data = load_config(config_path)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"failed to read config {config_path}: {e}") from e
    return config_from_dict(data)
