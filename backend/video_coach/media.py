"""Encoding of uploaded files into transportable media payloads."""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from typing import Any

DEFAULT_VIDEO_MIME = "video/mp4"


@dataclass(frozen=True)
class MediaPayload:
    name: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def upload_size(upload: Any) -> int:
    """Size in bytes of an uploaded file without encoding it.

    Streamlit's ``UploadedFile`` exposes ``size``; anything else is measured.
    """
    size = getattr(upload, "size", None)
    if isinstance(size, int):
        return size
    return len(upload.getvalue())


def guess_mime_type(name: str, declared: str | None = None) -> str:
    if declared and declared.strip():
        return declared.strip()
    guessed, _ = mimetypes.guess_type(name or "")
    return guessed or DEFAULT_VIDEO_MIME


def encode_upload(upload: Any) -> MediaPayload:
    """Read an uploaded file into a payload. I/O errors propagate."""
    name = getattr(upload, "name", "") or "upload"
    data = bytes(upload.getvalue())
    return MediaPayload(
        name=name,
        mime_type=guess_mime_type(name, getattr(upload, "type", None)),
        data=data,
    )
