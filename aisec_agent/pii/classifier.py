"""Advisory PII and secret classification for observed text.

Each detector reports presence only: a flag is True when its pattern
matches anywhere in the text. Nothing is redacted or counted.

Patterns are written for ``re.search`` and avoid nested unbounded
repetition so that adversarial input cannot trigger catastrophic
backtracking.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# PII detectors
# ---------------------------------------------------------------------------

PII_DETECTORS: dict[str, re.Pattern[str]] = {
    # Anchored on the character before "@"; a local part of any length
    # ends with one, so the match is only tried where an "@" occurs
    "email": re.compile(
        r"[A-Z0-9._%+\-]@[A-Z0-9.\-]+\.[A-Z]{2,}\b",
        re.IGNORECASE,
    ),
    "phone": re.compile(r"\+?\d[\d\s\-()]{7}"),
    "generic_id": re.compile(r"\b\d{8,}\b"),
    "credit_card": re.compile(r"\b(?:\d{4}[-\s]?){3}\d{4}\b"),
    "ssn": re.compile(r"\b\d{3}[-\s]?\d{2}[-\s]?\d{4}\b"),
    "address": re.compile(
        r"\b\d+\s+(?:\w+\s+){1,5}?"
        r"(?:street|st|avenue|ave|road|rd|drive|dr|lane|ln|way|court|ct|boulevard|blvd)\b",
        re.IGNORECASE,
    ),
}

# ---------------------------------------------------------------------------
# Secret detectors
# ---------------------------------------------------------------------------

SECRET_DETECTORS: dict[str, re.Pattern[str]] = {
    "api_key_pattern": re.compile(
        r"sk-[A-Za-z0-9]{20}|api[_-]?key\s*[:=]\s*['\"]?[A-Za-z0-9]{16}",
        re.IGNORECASE,
    ),
    "bearer_token": re.compile(r"bearer\s+[A-Za-z0-9\-._~+/]", re.IGNORECASE),
    "password_pattern": re.compile(
        r"(?:password|passwd|pwd)\s*[:=]\s*['\"][^'\"]{4}",
        re.IGNORECASE,
    ),
}

# Keys always present in a result, even for empty input
REQUIRED_PII_KEYS: tuple[str, ...] = ("email", "phone", "generic_id")
REQUIRED_SECRET_KEYS: tuple[str, ...] = ("api_key_pattern",)


def _classify(
    text: str | None,
    detectors: dict[str, re.Pattern[str]],
    required: tuple[str, ...],
) -> dict[str, bool]:
    if not text:
        return {key: False for key in required}
    return {name: pattern.search(text) is not None for name, pattern in detectors.items()}


def classify_pii(text: str | None) -> dict[str, bool]:
    """Flag the PII categories present in ``text``.

    Empty input returns only the required keys (email, phone, generic_id),
    all False. Optional keys are omitted rather than reported as False,
    since they were not evaluated.
    """
    return _classify(text, PII_DETECTORS, REQUIRED_PII_KEYS)


def classify_secrets(text: str | None) -> dict[str, bool]:
    """Flag credential-like patterns present in ``text``.

    Empty input returns ``{"api_key_pattern": False}``.
    """
    return _classify(text, SECRET_DETECTORS, REQUIRED_SECRET_KEYS)
