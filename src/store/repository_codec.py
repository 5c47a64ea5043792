"""JSON serialization for the repository state document.

This module centralizes the document schema. Decoding is strict:
any structural problem raises BiverDecodeError and nothing is repaired.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import re
from typing import Any

from core.errors import BiverDecodeError
from core.types import BranchHead, DetachedHead, Head, RepositoryData, Version
from core.version_id import VersionId

_FRACTION_PATTERN = re.compile(r"\.(\d+)")


def repository_to_payload(data: RepositoryData) -> dict[str, object]:
    """Serialize repository data into a JSON-safe payload.

    Args:
        data: Repository data.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "head": _head_to_payload(data.head),
        "versions": [_version_to_payload(version) for version in data.versions.values()],
        "branches": {
            name: version_id.storage_form() for name, version_id in data.branches.items()
        },
    }


def repository_from_payload(payload: object, source_path: Path) -> RepositoryData:
    """Deserialize a JSON payload into repository data.

    Args:
        payload: Parsed JSON document.
        source_path: Document path used in error messages.

    Returns:
        Parsed repository data.

    Raises:
        BiverDecodeError: If the payload does not match the schema.
    """
    root = _expect_dict(payload, "document root", source_path)
    versions_payload = root.get("versions")
    if not isinstance(versions_payload, list):
        raise _decode_error(source_path, "'versions' must be a list")
    branches_payload = _expect_dict(root.get("branches"), "'branches'", source_path)
    versions: dict[VersionId, Version] = {}
    for index, item in enumerate(versions_payload):
        version = _version_from_payload(item, f"versions[{index}]", source_path)
        if version.id in versions:
            raise _decode_error(source_path, f"duplicate version id {version.id.storage_form()}")
        versions[version.id] = version
    branches = {
        str(name): _parse_storage_id(value, f"branches[{name!r}]", source_path)
        for name, value in branches_payload.items()
    }
    head = _head_from_payload(root.get("head"), source_path)
    return RepositoryData(head=head, versions=versions, branches=branches)


def format_timestamp(value: datetime) -> str:
    """Render an aware timestamp as ISO-8601 UTC with microseconds."""
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a trailing ``Z`` and fractions longer than microseconds,
    which are truncated.

    Raises:
        ValueError: If text is not an ISO-8601 timestamp.
    """
    normalized = text.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    normalized = _FRACTION_PATTERN.sub(_microsecond_fraction, normalized, count=1)
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _microsecond_fraction(match: re.Match[str]) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def _head_to_payload(head: Head) -> dict[str, str]:
    if isinstance(head, BranchHead):
        return {"Branch": head.name}
    return {"Version": head.version_id.storage_form()}


def _head_from_payload(payload: object, source_path: Path) -> Head:
    head = _expect_dict(payload, "'head'", source_path)
    if len(head) != 1:
        raise _decode_error(source_path, "'head' must hold exactly one of Branch or Version")
    if "Branch" in head:
        name = head["Branch"]
        if not isinstance(name, str):
            raise _decode_error(source_path, "'head.Branch' must be a string")
        return BranchHead(name=name)
    if "Version" in head:
        version_id = _parse_storage_id(head["Version"], "'head.Version'", source_path)
        return DetachedHead(version_id=version_id)
    raise _decode_error(source_path, f"unknown head kind {next(iter(head))!r}")


def _version_to_payload(version: Version) -> dict[str, object]:
    return {
        "id": version.id.storage_form(),
        "creation_time": format_timestamp(version.creation_time),
        "content_fingerprint": version.content_fingerprint,
        "description": version.description,
        "nickname": version.nickname,
        "parent": version.parent.storage_form() if version.parent else None,
        "blob_reference": version.blob_reference,
    }


def _version_from_payload(payload: object, label: str, source_path: Path) -> Version:
    item = _expect_dict(payload, label, source_path)
    try:
        fingerprint_value = item["content_fingerprint"]
        if isinstance(fingerprint_value, bool) or not isinstance(fingerprint_value, int):
            raise _decode_error(source_path, f"{label}.content_fingerprint must be an integer")
        parent_value = item.get("parent")
        return Version(
            id=_parse_storage_id(item["id"], f"{label}.id", source_path),
            creation_time=_parse_timestamp_field(item["creation_time"], label, source_path),
            content_fingerprint=fingerprint_value,
            nickname=_expect_str(item["nickname"], f"{label}.nickname", source_path),
            description=_expect_str(item["description"], f"{label}.description", source_path),
            parent=_parse_storage_id(parent_value, f"{label}.parent", source_path)
            if parent_value is not None
            else None,
            blob_reference=_expect_str(
                item["blob_reference"], f"{label}.blob_reference", source_path
            ),
        )
    except KeyError as error:
        raise _decode_error(source_path, f"{label} is missing field {error.args[0]!r}") from error


def _parse_timestamp_field(value: object, label: str, source_path: Path) -> datetime:
    text = _expect_str(value, f"{label}.creation_time", source_path)
    try:
        return parse_timestamp(text)
    except ValueError as error:
        raise _decode_error(
            source_path, f"{label}.creation_time '{text}' is not ISO-8601"
        ) from error


def _parse_storage_id(value: object, label: str, source_path: Path) -> VersionId:
    text = _expect_str(value, label, source_path)
    try:
        return VersionId.from_storage_form(text)
    except ValueError as error:
        raise _decode_error(source_path, f"{label} '{text}' is not a valid version id") from error


def _expect_dict(value: object, label: str, source_path: Path) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _decode_error(source_path, f"{label} must be a JSON object")
    return value


def _expect_str(value: object, label: str, source_path: Path) -> str:
    if not isinstance(value, str):
        raise _decode_error(source_path, f"{label} must be a string")
    return value


def _decode_error(source_path: Path, detail: str) -> BiverDecodeError:
    return BiverDecodeError(
        f"Failed to decode repository document at {source_path}: {detail}. "
        "The document is not repaired automatically; restore it from a backup."
    )
