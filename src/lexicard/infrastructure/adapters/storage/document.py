"""
Encoding and decoding of the persisted state document.

Decoding never fails on bad data: corrupt sections and card records are
logged and replaced by defaults. Only ``strict`` decoding (used for user
imports) rejects documents that are not JSON objects or carry no version.
"""

import json
import logging
from datetime import date
from typing import Any

from pydantic import ValidationError

from lexicard.domain.cards.models import CardState, LearnerSettings, StoreSnapshot
from lexicard.domain.constants import STATE_VERSION

from .records import CardRecord, SettingsRecord

logger = logging.getLogger(__name__)

# Sections this package reads and writes; any other top-level key belongs to the host
DOCUMENT_KEYS = frozenset({"version", "settings", "srsCards"})


class DocumentError(ValueError):
    """Raised by strict decoding when the text is not a state document."""


def decode_card(item_id: str, raw: Any, today: date) -> CardState:
    """
    Decode one persisted card record.

    Falls back to a fresh initial state when the record is corrupt.
    """
    try:
        return CardRecord.model_validate(raw).to_state()
    except ValidationError as e:
        logger.warning(f"Invalid card record for {item_id!r}, resetting it: {e.error_count()} error(s)")
        return CardState.initial(today)


def decode_settings(raw: Any) -> LearnerSettings:
    if raw is None:
        return LearnerSettings()
    try:
        return SettingsRecord.model_validate(raw).to_settings()
    except ValidationError as e:
        logger.warning(f"Invalid settings section, using defaults: {e.error_count()} error(s)")
        return LearnerSettings()


def unknown_settings(raw: Any) -> dict[str, Any]:
    """Settings keys with no matching field, kept so a save writes them back."""
    if not isinstance(raw, dict):
        return {}
    known = SettingsRecord.known_keys()
    return {key: value for key, value in raw.items() if key not in known}


def snapshot_from_data(data: Any, today: date) -> StoreSnapshot:
    """
    Merge a parsed document onto the default state.

    Unknown top-level sections and settings keys are carried along in the
    snapshot; missing ones take their defaults.
    """
    if not isinstance(data, dict):
        logger.warning(f"State document is a {type(data).__name__}, not an object; using defaults")
        return StoreSnapshot()

    raw_cards = data.get("srsCards") or {}
    if not isinstance(raw_cards, dict):
        logger.warning("srsCards section is not an object; ignoring it")
        raw_cards = {}

    cards = {str(item_id): decode_card(str(item_id), raw, today) for item_id, raw in raw_cards.items()}
    raw_settings = data.get("settings")
    return StoreSnapshot(
        cards=cards,
        settings=decode_settings(raw_settings),
        extra={key: value for key, value in data.items() if key not in DOCUMENT_KEYS},
        settings_extra=unknown_settings(raw_settings),
    )


def decode_document(text: str, today: date, strict: bool = False) -> StoreSnapshot:
    """
    Parse a JSON state document.

    Args:
        text: Raw JSON text.
        today: Date used for the default state of corrupt card records.
        strict: Reject invalid JSON and documents without a version instead
            of falling back to defaults.

    Raises:
        DocumentError: Only in strict mode.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        if strict:
            raise DocumentError(f"Not valid JSON: {e}") from e
        logger.warning(f"State document is not valid JSON, using defaults: {e}")
        return StoreSnapshot()

    if strict and (not isinstance(data, dict) or not data.get("version")):
        raise DocumentError("State document has no version")

    return snapshot_from_data(data, today)


def snapshot_to_data(snapshot: StoreSnapshot) -> dict[str, Any]:
    data: dict[str, Any] = {"version": STATE_VERSION}
    data.update((key, value) for key, value in snapshot.extra.items() if key not in DOCUMENT_KEYS)

    settings = dict(snapshot.settings_extra)
    settings.update(SettingsRecord.from_settings(snapshot.settings).model_dump(by_alias=True, mode="json"))
    data["settings"] = settings

    data["srsCards"] = {
        item_id: CardRecord.from_state(state).model_dump(by_alias=True, mode="json")
        for item_id, state in snapshot.cards.items()
    }
    return data


def encode_document(snapshot: StoreSnapshot, indent: int | None = 2) -> str:
    return json.dumps(snapshot_to_data(snapshot), indent=indent, ensure_ascii=False)
