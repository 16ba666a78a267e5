"""Build attachment payloads for :meth:`HarvestClient.add_attachment_to_candidate`."""

from __future__ import annotations

import base64
import mimetypes
import os
from typing import Dict

ATTACHMENT_TYPES = frozenset(
    {
        "resume",
        "cover_letter",
        "admin_only",
        "offer_packet",
        "offer_letter",
        "take_home_test",
        "other",
    }
)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def encode_attachment(
    content: bytes,
    filename: str,
    *,
    type: str = "resume",
    content_type: str | None = None,
) -> Dict[str, str]:
    """Return the JSON body for an attachment upload with base64 ``content``."""
    if type not in ATTACHMENT_TYPES:
        allowed = ", ".join(sorted(ATTACHMENT_TYPES))
        raise ValueError(f"Unsupported attachment type {type!r}; expected one of: {allowed}")
    if content_type is None:
        content_type = mimetypes.guess_type(filename)[0] or DEFAULT_CONTENT_TYPE
    return {
        "filename": filename,
        "type": type,
        "content": base64.b64encode(content).decode("ascii"),
        "content_type": content_type,
    }


def attachment_from_file(
    path: str | os.PathLike[str],
    *,
    type: str = "resume",
    content_type: str | None = None,
    filename: str | None = None,
) -> Dict[str, str]:
    with open(path, "rb") as handle:
        content = handle.read()
    return encode_attachment(
        content,
        filename or os.path.basename(os.fspath(path)),
        type=type,
        content_type=content_type,
    )
