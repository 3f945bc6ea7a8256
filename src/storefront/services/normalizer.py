from __future__ import annotations

import json
import math
import re
from typing import Any, Iterable, List, Optional

from ..models import KeyFeaturesInput, ProductDraft, ProductSubmission

DEFAULT_CATEGORY = "General"

# Leading decimal number, the same prefix a browser's parseFloat accepts
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def clean_text(value: Optional[str]) -> str:
    return (value or "").strip()


def clean_optional(value: Optional[str]) -> Optional[str]:
    cleaned = clean_text(value)
    return cleaned or None


def parse_price(value: Any) -> float:
    """Coerce a submitted price to a finite, non-negative float (0 when unusable)."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _trimmed_items(items: Iterable[str]) -> List[str]:
    return [item.strip() for item in items if item.strip()]


def _text_lines(text: str) -> List[str]:
    return _trimmed_items(text.split("\n"))


def parse_key_features(value: KeyFeaturesInput) -> List[str]:
    """Resolve list-or-string keyFeatures input into an ordered list of strings.

    Lists keep their order. Strings are decoded as JSON; anything that does
    not decode to a JSON array is treated as plain text, one feature per
    non-blank line. Every feature is trimmed and blank ones are dropped.
    """

    if value is None:
        return []
    if isinstance(value, list):
        return _trimmed_items(str(item) for item in value if item is not None)

    if not value.strip():
        return []
    try:
        decoded = json.loads(value)
    except ValueError:
        return _text_lines(value)
    if isinstance(decoded, list):
        return _trimmed_items(
            item if isinstance(item, str) else json.dumps(item)
            for item in decoded
            if item is not None
        )
    return _text_lines(value)


def build_draft(submission: ProductSubmission) -> Optional[ProductDraft]:
    """Normalize a submission; ``None`` when name or description is missing."""

    name = clean_text(submission.name)
    description = clean_text(submission.description)
    if not name or not description:
        return None

    return ProductDraft(
        name=name,
        description=description,
        price=parse_price(submission.price),
        category=clean_text(submission.category) or DEFAULT_CATEGORY,
        key_features=parse_key_features(submission.key_features),
        material=clean_optional(submission.material),
        compatibility=clean_optional(submission.compatibility),
        best_for=clean_optional(submission.best_for),
        warranty=clean_optional(submission.warranty),
    )


__all__ = [
    "DEFAULT_CATEGORY",
    "build_draft",
    "clean_optional",
    "clean_text",
    "parse_key_features",
    "parse_price",
]
