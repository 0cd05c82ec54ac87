# ABOUTME: Renders a flat metadata block as a YAML front matter header and parses it back.
# ABOUTME: Applies the empty-value suppression rules and degrades to an empty block on bad input.

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

import yaml

logger = logging.getLogger(__name__)

MetadataBlock = dict[str, Any]

DELIMITER = "---"
EMPTY_HEADER = f"{DELIMITER}\n{DELIMITER}"

# Internal detail key: never persisted, only the compact summary is.
HISTORY_DETAIL_KEY = "reading_history"
SUMMARY_KEY = "reading_history_summary"
REQUIRED_KEYS = ("title", "author", "status")

# Header must open on the very first line; the closing delimiter may end the text.
_HEADER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:(?P<yaml>.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


class _FrontmatterDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors and prefers double-quoted scalars."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def choose_scalar_style(self) -> str | None:
        style = super().choose_scalar_style()
        if style == "'":
            return '"'
        return style


def _is_flat_mapping(item: Any) -> bool:
    return isinstance(item, Mapping)


def _summary_entries(value: Any) -> list[dict[str, Any]]:
    """Coerce a raw summary value to a list of mappings, dropping anything else."""
    if not isinstance(value, list):
        return []
    return [dict(item) for item in value if _is_flat_mapping(item)]


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, list) and not value)


def _prepare_for_dump(block: Mapping[str, Any]) -> MetadataBlock:
    """Apply the suppression rules, in precedence order, ahead of YAML rendering."""
    data: MetadataBlock = {}
    for key, value in block.items():
        if key == HISTORY_DETAIL_KEY:
            continue
        if key in REQUIRED_KEYS and _is_empty(value):
            data[key] = ""
            continue
        if value is None or value == "":
            continue
        if key == SUMMARY_KEY:
            data[key] = _summary_entries(value)
            continue
        if isinstance(value, list) and not value:
            continue
        data[key] = value

    # Required keys are always present so a human editor sees what to fill in.
    for key in REQUIRED_KEYS:
        data.setdefault(key, "")
    return data


def serialize_block(block: Mapping[str, Any]) -> str:
    """Render block as a delimited YAML header (no trailing newline).

    Never raises: a block that cannot be rendered yields an empty header.
    """
    try:
        data = _prepare_for_dump(block)
        text = yaml.dump(
            data,
            Dumper=_FrontmatterDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=float("inf"),
            indent=2,
        )
    except (yaml.YAMLError, TypeError, ValueError) as exc:
        logger.error("Could not render front matter, writing an empty header: %s", exc)
        return EMPTY_HEADER
    return f"{DELIMITER}\n{text}{DELIMITER}"


def _stringify_dates(value: Any) -> Any:
    """Turn YAML-resolved dates back into the note's fixed string formats."""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, list):
        return [_stringify_dates(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _stringify_dates(item) for key, item in value.items()}
    return value


def normalize_block(raw: Mapping[str, Any]) -> MetadataBlock:
    """Apply the deserializer's normalization to an already-parsed mapping.

    Mirrors the serializer's suppression rules so that
    normalize_block(parsed) re-serializes to identical text.
    """
    block: MetadataBlock = {}
    for key, value in raw.items():
        key = str(key)
        if key == HISTORY_DETAIL_KEY:
            continue
        value = _stringify_dates(value)
        if key == SUMMARY_KEY:
            block[key] = _summary_entries(value)
            continue
        if value == "" and key not in REQUIRED_KEYS:
            continue
        block[key] = value
    return block


def deserialize_note(text: str) -> tuple[MetadataBlock, str]:
    """Split note text into its metadata block and body.

    Text without a header anchored at the start is all body. A header that
    is not valid YAML, or not a mapping, yields an empty block; the body is
    still returned so other operations can proceed.
    """
    match = _HEADER_RE.match(text)
    if match is None:
        return {}, text

    body = text[match.end():]
    raw_yaml = match.group("yaml") or ""
    try:
        parsed = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as exc:
        logger.warning("Ignoring malformed front matter: %s", exc)
        return {}, body

    if not isinstance(parsed, Mapping):
        if parsed is not None:
            logger.warning("Ignoring front matter that is not a mapping: %r", type(parsed).__name__)
        return {}, body

    return normalize_block(parsed), body


def compose_note(block: Mapping[str, Any], body: str) -> str:
    """Full note text: header, newline, body."""
    return f"{serialize_block(block)}\n{body}"
