"""
multipart/form-data bodies for requests that carry attachments.

Encoding is delegated to httpx; the boundary is fixed up front so the body can
be built once and transmitted unmodified by the client.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import httpx

from .models import Attachment

ATTACHMENT_FIELD = "attachments[]"
ATTACHMENT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class MultipartBody:
    content: bytes
    boundary: str

    @property
    def content_type(self) -> str:
        return f'multipart/form-data; boundary="{self.boundary}"'


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(fields: Mapping[str, Any]) -> Dict[str, List[str]]:
    """
    Turn a request mapping into form fields.
    - lists become repeated `name[]` parts
    - mappings (custom_fields) become `name[key]` parts
    - None is dropped
    """
    flat: Dict[str, List[str]] = {}
    for name, value in fields.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            for key, inner in value.items():
                if inner is None:
                    continue
                flat.setdefault(f"{name}[{key}]", []).append(_scalar(inner))
        elif isinstance(value, (list, tuple)):
            items = [_scalar(v) for v in value if v is not None]
            if items:
                flat.setdefault(f"{name}[]", []).extend(items)
        else:
            flat.setdefault(name, []).append(_scalar(value))
    return flat


def _files(
    attachments: Iterable[Attachment],
) -> List[Tuple[str, Tuple[str, bytes, str]]]:
    return [
        (ATTACHMENT_FIELD, (a.filename, a.content, ATTACHMENT_CONTENT_TYPE))
        for a in attachments
    ]


def encode_multipart(
    fields: Mapping[str, Any],
    attachments: Sequence[Attachment] = (),
    *,
    boundary: Optional[str] = None,
) -> MultipartBody:
    """
    Encode scalar fields and attachments as a single multipart body.
    Requests without attachments are sent as JSON instead.
    """
    if not attachments:
        raise ValueError("multipart encoding requires at least one attachment")
    boundary = boundary or str(uuid.uuid4())
    content_type = f'multipart/form-data; boundary="{boundary}"'

    # httpx picks the boundary up from an explicit Content-Type header.
    request = httpx.Request(
        "POST",
        "http://multipart.invalid/",
        data=_flatten(fields),
        files=_files(attachments),
        headers={"Content-Type": content_type},
    )
    return MultipartBody(content=request.read(), boundary=boundary)


__all__ = ["MultipartBody", "encode_multipart", "ATTACHMENT_FIELD"]
