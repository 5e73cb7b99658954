from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable, Iterable
from urllib.parse import quote

import certifi

from .config import DEFAULT_API_URL
from .models import Contribution

BATCH_SIZE = 5
TEXT_MATCH_ACCEPT = "application/vnd.github.v3.text-match+json"


def batches(items: list[str], size: int = BATCH_SIZE) -> list[list[str]]:
    if size <= 0:
        raise ValueError("batch size must be positive")
    return [items[i : i + size] for i in range(0, len(items), size)]


def search_users_url(api_url: str, emails: list[str]) -> str:
    queries = [quote(email, safe="@") + "%20in:email" for email in emails]
    base = (api_url or DEFAULT_API_URL).strip().rstrip("/")
    return base + "/search/users?q=" + "%20OR%20".join(queries)


def logins_from_search_response(data: object, emails: Iterable[str]) -> dict[str, str]:
    """
    Map each queried email to the login of the first search result whose text
    match fragment is exactly that email.
    """
    wanted = set(emails)
    out: dict[str, str] = {}
    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return out
    for item in items:
        if not isinstance(item, dict):
            continue
        login = item.get("login")
        if not isinstance(login, str) or not login:
            continue
        matches = item.get("text_matches")
        if not isinstance(matches, list):
            continue
        for m in matches:
            if not isinstance(m, dict):
                continue
            fragment = m.get("fragment")
            if isinstance(fragment, str) and fragment in wanted and fragment not in out:
                out[fragment] = login
    return out


def search_logins(
    emails: list[str],
    *,
    api_url: str = DEFAULT_API_URL,
    token: str = "",
    timeout_s: float = 30,
    ca_bundle_path: str = "",
) -> dict[str, str]:
    if not emails:
        return {}

    headers = {"Accept": TEXT_MATCH_ACCEPT}
    if token.strip():
        headers["Authorization"] = f"Bearer {token.strip()}"
    try:
        req = urllib.request.Request(search_users_url(api_url, emails), method="GET", headers=headers)
        ctx = _ssl_context(ca_bundle_path=ca_bundle_path)
        with urllib.request.urlopen(req, timeout=timeout_s, context=ctx) as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise RuntimeError(f"user search failed: HTTP {e.code}") from e
    except (ValueError, OSError, http.client.HTTPException) as e:
        raise RuntimeError(f"user search failed: {e}") from e

    try:
        data = json.loads(body.decode("utf-8"))
    except ValueError as e:
        raise RuntimeError(f"user search returned invalid JSON: {e}") from e
    return logins_from_search_response(data, emails)


def lookup_github_logins(
    emails: list[str],
    *,
    api_url: str = DEFAULT_API_URL,
    token: str = "",
    timeout_s: float = 30,
    ca_bundle_path: str = "",
    batch_size: int = BATCH_SIZE,
    on_error: Callable[[list[str], Exception], None] | None = None,
) -> dict[str, str]:
    """
    Resolve GitHub logins for `emails`, one search request per batch.

    A failed batch contributes nothing; `on_error` is told about it and the
    remaining batches still run.
    """
    result: dict[str, str] = {}
    for batch in batches(emails, batch_size):
        try:
            found = search_logins(
                batch,
                api_url=api_url,
                token=token,
                timeout_s=timeout_s,
                ca_bundle_path=ca_bundle_path,
            )
        except RuntimeError as e:
            if on_error is not None:
                on_error(batch, e)
            continue
        for email, login in found.items():
            result.setdefault(email, login)
    return result


def apply_logins(contributions: Iterable[Contribution], logins: dict[str, str]) -> None:
    for c in contributions:
        login = logins.get(c.email)
        if login:
            c.login = login


def _ssl_context(*, ca_bundle_path: str) -> ssl.SSLContext:
    p = (ca_bundle_path or "").strip()
    if p:
        path = Path(p).expanduser()
        if path.is_dir():
            return ssl.create_default_context(capath=str(path))
        return ssl.create_default_context(cafile=str(path))
    return ssl.create_default_context(cafile=certifi.where())
