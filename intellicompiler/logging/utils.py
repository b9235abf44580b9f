# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Logging helpers (secret redaction, rotating log files)."""

from __future__ import annotations

import logging
import os

from logging.handlers import RotatingFileHandler
from pathlib import Path

_REDACT_KEYS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "RELAY_API_KEY",
)


def redact(text: str) -> str:
    """Scrub API key names and their current values from ``text``."""

    if not text:
        return ""
    cleaned = text
    for key in _REDACT_KEYS:
        secret = os.environ.get(key)
        if secret and len(secret) >= 8 and secret in cleaned:
            cleaned = cleaned.replace(secret, "<REDACTED>")
        if key in cleaned:
            cleaned = cleaned.replace(key, "<REDACTED_KEY>")
    return cleaned


def setup_file_logger(
    log_file: Path, name: str = "intellicompiler"
) -> logging.Logger:
    """Attach a rotating file handler to ``name`` (idempotent per file)."""

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    marker = str(log_file)
    if not any(
        isinstance(handler, RotatingFileHandler)
        and getattr(handler, "_tap_tag", None) == marker
        for handler in logger.handlers
    ):
        handler = RotatingFileHandler(
            log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        handler.setLevel(logging.INFO)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._tap_tag = marker  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
