"""
Environment + project-root helpers.

Provider API keys (Google, Foursquare, Ticketmaster, ...) usually live in a
repo-local `.env` file. The API server, the CLI and pytest may all start from
different working directories, so the file is located by walking up from the
current directory (then from this package) until something that looks like the
repo root turns up.

`DATENIGHT_ENV_FILE` points at an explicit env file; `DATENIGHT_PROJECT_ROOT`
pins the root. Variables already present in the process environment always win.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

_ROOT_MARKERS = (".env", ".git")


def _is_repo_root(path: Path) -> bool:
    if any((path / marker).exists() for marker in _ROOT_MARKERS):
        return True
    return (path / "pyproject.toml").is_file() and (path / "src" / "datenight").is_dir()


def _search_up(start: Path) -> Path | None:
    start = start.resolve()
    for candidate in (start, *start.parents):
        if _is_repo_root(candidate):
            return candidate
    return None


@lru_cache
def get_project_root() -> Path:
    """Best-guess repository root (cached)."""
    pinned = os.getenv("DATENIGHT_PROJECT_ROOT")
    if pinned:
        return Path(pinned).expanduser().resolve()

    env_file = os.getenv("DATENIGHT_ENV_FILE")
    if env_file:
        return Path(env_file).expanduser().resolve().parent

    return _search_up(Path.cwd()) or _search_up(Path(__file__).parent) or Path.cwd().resolve()


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the env file once; return its path, or None when there is none."""
    from dotenv import load_dotenv

    explicit = os.getenv("DATENIGHT_ENV_FILE")
    env_path = Path(explicit).expanduser().resolve() if explicit else get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path
