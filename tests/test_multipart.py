from pathlib import Path

import pytest
import respx
from httpx import Response
from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.config import Environment, EnvironmentBinding
from freshservice_toolkit.core.errors import FreshserviceClientError
from freshservice_toolkit.core.models import Attachment
from freshservice_toolkit.core.multipart import encode_multipart

LIVE = "https://live.freshservice.test/api/v2"

FIELDS = {
    "subject": "Laptop broken",
    "priority": 2,
    "private": True,
    "cc_emails": ["a@example.com", "b@example.com"],
    "custom_fields": {"asset_tag": "LT-1", "unset": None},
    "group_id": None,
}


@pytest.fixture
def attachments():
    return [
        Attachment(filename="screen.png", content=b"\x89PNG-bytes"),
        Attachment(filename="notes.txt", content=b"hello"),
    ]


def test_same_input_differs_only_by_boundary(attachments):
    one = encode_multipart(FIELDS, attachments, boundary="boundary-one-7f3a")
    two = encode_multipart(FIELDS, attachments, boundary="boundary-two-9c1e")

    assert one.content != two.content
    assert one.content.replace(b"boundary-one-7f3a", b"B") == two.content.replace(
        b"boundary-two-9c1e", b"B"
    )


def test_every_part_uses_the_same_boundary(attachments):
    body = encode_multipart(FIELDS, attachments, boundary="fixed-boundary-01")
    content = body.content

    # subject, priority, private, 2x cc_emails[], custom_fields[asset_tag], 2 files
    assert content.count(b"--fixed-boundary-01\r\n") == 8
    assert content.endswith(b"--fixed-boundary-01--\r\n")
    assert body.content_type == 'multipart/form-data; boundary="fixed-boundary-01"'


def test_part_layout(attachments):
    content = encode_multipart(FIELDS, attachments, boundary="bnd-123").content

    assert b'Content-Disposition: form-data; name="subject"\r\n\r\nLaptop broken\r\n' in content
    assert b'name="priority"\r\n\r\n2\r\n' in content
    assert b'name="private"\r\n\r\ntrue\r\n' in content
    assert content.count(b'name="cc_emails[]"') == 2
    assert b'name="custom_fields[asset_tag]"\r\n\r\nLT-1\r\n' in content
    assert b"unset" not in content
    assert b"group_id" not in content
    assert (
        b'name="attachments[]"; filename="screen.png"\r\n'
        b"Content-Type: application/octet-stream\r\n\r\n\x89PNG-bytes\r\n"
    ) in content


def test_default_boundary_is_generated(attachments):
    one = encode_multipart({"subject": "x"}, attachments)
    two = encode_multipart({"subject": "x"}, attachments)

    assert one.boundary != two.boundary
    assert one.boundary.encode() in one.content


def test_attachments_required():
    with pytest.raises(ValueError):
        encode_multipart({"subject": "x"}, [])


def test_attachment_from_path(tmp_path: Path):
    f = tmp_path / "sample.txt"
    f.write_text("hello")

    att = Attachment.from_path(str(f))

    assert att.filename == "sample.txt"
    assert att.content == b"hello"


def test_attachment_from_missing_path_raises(tmp_path: Path):
    with pytest.raises(FreshserviceClientError):
        Attachment.from_path(str(tmp_path / "nope.bin"))


@respx.mock
def test_client_sends_multipart_unmodified(attachments):
    route = respx.post(f"{LIVE}/tickets").mock(
        return_value=Response(201, json={"ticket": {"id": 12}})
    )
    body = encode_multipart({"subject": "x"}, attachments, boundary="wire-bnd")

    cl = FreshserviceClient(
        environments={
            Environment.LIVE: EnvironmentBinding(host="live.freshservice.test", api_key="k")
        }
    )
    with cl:
        created = cl.post("tickets", "ticket", body)

    assert created == {"id": 12}
    req = route.calls[0].request
    assert req.headers["Content-Type"] == 'multipart/form-data; boundary="wire-bnd"'
    assert req.content == body.content
