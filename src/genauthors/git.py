from __future__ import annotations

import subprocess
from pathlib import Path


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def read_shortlog(repo: Path, timeout_s: int = 300) -> list[str]:
    """
    Return the `git shortlog -sne` summary of `repo`, one
    "<count>\\t<name> <<email>>" entry per line.
    """
    try:
        code, out, err = run_git(["shortlog", "-sne", "HEAD"], cwd=repo, timeout_s=timeout_s)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise RuntimeError(f"git shortlog failed: {e}") from e
    if code != 0:
        msg = err.strip() or "no output"
        raise RuntimeError(f"git shortlog failed (exit {code}): {msg}")
    return out.split("\n")


def read_mailmap(path: Path) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(f"failed to read {path}: {e}") from e
    return text.split("\n")
