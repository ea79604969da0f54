"""Normalization of remote file payloads into KnowledgeFile.

Vector-store listings, raw file details and attach responses all describe
the same document with different field names and different gaps. These
helpers read whatever is present and fall back field by field.
"""

import math
from typing import Any

from src.models.schemas import FilePayload, KnowledgeFile


def _str_or(value: Any, fallback: str) -> str:
    return value if isinstance(value, str) and value else fallback


def _int_or(value: Any, fallback: int) -> int:
    # bool is an int subclass; never a valid size or timestamp
    if isinstance(value, bool) or not isinstance(value, int | float):
        return fallback
    if not math.isfinite(value) or value < 0:
        return fallback
    return int(value)


def _metadata_or(value: Any, fallback: dict[str, str]) -> dict[str, str]:
    if not isinstance(value, dict):
        return fallback
    return {str(k): v if isinstance(v, str) else str(v) for k, v in value.items()}


def raw_file_id(item: dict[str, Any]) -> str:
    """Id of the underlying raw file for a vector-store association."""
    return _str_or(item.get("file_id"), _str_or(item.get("id"), ""))


def file_from_listing(item: dict[str, Any], now: int) -> KnowledgeFile:
    """Build a KnowledgeFile from one vector-store listing entry.

    Args:
        item: Entry of the ``data`` array of a list-store-files response.
        now: Fallback creation time in unix seconds.
    """
    association_id = _str_or(item.get("id"), "")
    metadata = item.get("metadata")
    if metadata is None:
        metadata = item.get("attributes")
    return KnowledgeFile(
        id=association_id,
        filename=_str_or(item.get("filename"), raw_file_id(item)),
        bytes=_int_or(item.get("usage_bytes"), 0),
        status=_str_or(item.get("status"), "unknown"),
        created_at=_int_or(item.get("created_at"), now),
        metadata=_metadata_or(metadata, {}),
    )


def enrich_file(file: KnowledgeFile, detail: Any) -> KnowledgeFile:
    """Overlay fields from a raw file detail response onto a listed file.

    Only filename, size, metadata and creation time are taken from the
    detail; id and status stay those of the association.
    """
    if not isinstance(detail, dict):
        return file
    return file.model_copy(
        update={
            "filename": _str_or(detail.get("filename"), file.filename),
            "bytes": _int_or(detail.get("bytes"), file.bytes),
            "metadata": _metadata_or(detail.get("metadata"), file.metadata),
            "created_at": _int_or(detail.get("created_at"), file.created_at),
        }
    )


def file_from_attachment(
    attached: Any,
    uploaded_id: str,
    payload: FilePayload,
    now: int,
) -> KnowledgeFile:
    """Build a KnowledgeFile from an attach-to-store response.

    Args:
        attached: Decoded attach response body.
        uploaded_id: Raw file id returned by the create-file step.
        payload: The local file that was uploaded.
        now: Fallback creation time in unix seconds.
    """
    if not isinstance(attached, dict):
        attached = {}
    return KnowledgeFile(
        id=_str_or(attached.get("id"), uploaded_id),
        filename=payload.name,
        bytes=_int_or(attached.get("usage_bytes"), payload.size),
        status=_str_or(attached.get("status"), "in_progress"),
        created_at=_int_or(attached.get("created_at"), now),
    )
