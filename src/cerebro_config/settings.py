from __future__ import annotations

import logging
import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward until we find pyproject.toml or .git.
    """
    start = start.resolve()
    for p in (start, *start.parents):
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return None


@lru_cache(maxsize=1)
def repo_root() -> Path:
    """Best-effort repository root discovery.

    Order of precedence:
      1) CEREBRO_REPO_ROOT (explicit override)
      2) walk upward from current working directory
      3) walk upward from this module file's directory
    """
    explicit = os.getenv("CEREBRO_REPO_ROOT")
    if explicit:
        p = Path(explicit).expanduser().resolve()
        if not p.is_dir():
            raise RuntimeError(f"CEREBRO_REPO_ROOT does not exist or is not a directory: {p}")
        return p

    cwd = Path.cwd().resolve()
    root = _find_repo_root(cwd)
    if root:
        return root

    here_dir = Path(__file__).resolve().parent
    root = _find_repo_root(here_dir)
    if root:
        return root

    return cwd


@lru_cache(maxsize=1)
def load_env_once() -> Optional[Path]:
    """
    Load dotenv exactly once. Precedence:
      1) CEREBRO_ENV_FILE (explicit path)
      2) repo-root/.env
    """
    candidates = []
    explicit = os.getenv("CEREBRO_ENV_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(repo_root() / ".env")

    for p in candidates:
        if p.is_file():
            # Do NOT override already-set environment variables
            load_dotenv(dotenv_path=str(p), override=False)
            return p.resolve()

    return None


def env_float(name: str, default: float | None = None) -> float | None:
    """Read a float from the environment; unset, blank or malformed values give `default`."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes"}


def configure_logging() -> None:
    """
    Configure logging explicitly. No import-time side effects.
    Idempotent: if logging is already configured, do nothing.

    Logs go to stderr: stdout is the MCP stdio transport.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = os.getenv("CEREBRO_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = os.getenv(
        "CEREBRO_LOG_FORMAT",
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logging.basicConfig(level=level, format=fmt, stream=sys.stderr)


def init_runtime(*, configure_logs: bool = True, load_env: bool = True) -> None:
    """
    Call this from entrypoints only (servers, scripts).
    """
    if load_env:
        load_env_once()
    if configure_logs:
        configure_logging()
