# config.py
"""
Centralized configuration for dicterm.

Defaults live on :class:`DictermConfig` as class attributes. Environment
variables override them (``DICTERM_*``), and command-line flags override
both by calling :meth:`DictermConfig.override`.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def parse_intervals(raw: str) -> List[int]:
    """Parse ``"1,2,4,6,10"`` into a list of day counts."""
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError as e:
        raise ValueError(f"invalid interval list {raw!r}") from e


class DictermConfig:
    """Process-wide settings."""

    # ---------- Dictionaries ----------
    DICPATH = Path(os.environ.get("DICTERM_DICPATH", "/usr/share/dicrs/"))
    DICEXTENSION = ".db"

    # ---------- Leitner deck ----------
    DATA_DIR = Path(
        os.environ.get("DICTERM_DATA_DIR", Path.home() / ".local" / "share" / "dicterm")
    )
    LEITNER_DB = "leitner.db"
    # review interval in days for boxes 1..5; None reads DICTERM_INTERVALS
    LEITNER_INTERVALS: Optional[List[int]] = None
    AUTOSAVE = _env_bool("DICTERM_AUTOSAVE", True)

    # ---------- Search / view ----------
    SUBSTRING_FALLBACK = _env_bool("DICTERM_SUBSTRING_FALLBACK", True)
    VISIBLE_ROWS = 20

    # ---------- Logging ----------
    LOGGING: Dict[str, Optional[str]] = {
        "level": os.environ.get("DICTERM_LOG_LEVEL", "INFO"),
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "file": None,
    }

    @classmethod
    def leitner_db_path(cls) -> Path:
        return Path(cls.DATA_DIR) / cls.LEITNER_DB

    @classmethod
    def leitner_intervals(cls) -> List[int]:
        """Configured intervals; the environment is parsed on first use."""
        if cls.LEITNER_INTERVALS is None:
            cls.LEITNER_INTERVALS = parse_intervals(
                os.environ.get("DICTERM_INTERVALS", "1,2,4,6,10")
            )
        return cls.LEITNER_INTERVALS

    @classmethod
    def log_file_path(cls) -> Path:
        return Path(cls.DATA_DIR) / "dicterm.log"

    @classmethod
    def override(cls, **values) -> None:
        """Apply non-``None`` overrides, e.g. from parsed CLI flags."""
        for key, value in values.items():
            if value is None:
                continue
            attr = key.upper()
            if not hasattr(cls, attr):
                raise AttributeError(f"unknown setting {key!r}")
            setattr(cls, attr, value)


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """Configure the root logger from :attr:`DictermConfig.LOGGING`."""
    cfg = DictermConfig.LOGGING
    level_name = (level or cfg["level"] or "INFO").upper()
    target = log_file or cfg.get("file")

    handlers: List[logging.Handler] = []
    if target:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(target, encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=cfg["format"],
        handlers=handlers,
        force=True,
    )


__all__ = ["DictermConfig", "parse_intervals", "setup_logging"]
