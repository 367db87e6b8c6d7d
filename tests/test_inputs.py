from io import BytesIO, StringIO

import pytest
import requests

from creative_lab.errors import EncodingError, ValidationError
from creative_lab.models import CreativeFormat, ImagePayload
from creative_lab.services import inputs
from creative_lab.services.inputs import normalize_request


@pytest.mark.parametrize("text,occasion,image", [
    ("", "", None),
    ("   ", "\t", None),
    (None, None, b""),
])
def test_empty_submission_is_rejected(text, occasion, image):
    with pytest.raises(ValidationError) as exc:
        normalize_request(text, occasion, "banner", image)
    assert "product information" in exc.value.message


def test_text_only_request():
    request = normalize_request("  CCTV kit ", "", "banner")

    assert request.product_text == "CCTV kit"
    assert request.creative_format is CreativeFormat.BANNER
    assert request.image is None


def test_unknown_format_passes_through():
    assert normalize_request("x", "", "poster").creative_format == "poster"


def test_image_bytes_get_detected_mime(png_bytes):
    request = normalize_request("", "", "brochure", png_bytes)

    assert request.image == ImagePayload(png_bytes, "image/png")
    assert request.image.base64


def test_declared_mime_type_wins(png_bytes):
    request = normalize_request("", "", "brochure", BytesIO(png_bytes), mime_type="image/x-custom")
    assert request.image.mime_type == "image/x-custom"


def test_image_from_path(tmp_path, png_bytes):
    path = tmp_path / "ref.png"
    path.write_bytes(png_bytes)

    request = normalize_request("", "", "brochure", str(path))
    assert request.image.data == png_bytes


def test_missing_file_is_encoding_error(tmp_path):
    with pytest.raises(EncodingError):
        normalize_request("", "", "brochure", tmp_path / "missing.png")


def test_non_image_bytes_is_encoding_error():
    with pytest.raises(EncodingError):
        normalize_request("", "", "brochure", b"definitely not an image")


def test_text_mode_file_is_encoding_error():
    with pytest.raises(EncodingError):
        normalize_request("", "", "brochure", StringIO("text"))


def test_image_from_url(monkeypatch, png_bytes):
    class FakeResponse:
        content = png_bytes

        def raise_for_status(self):
            pass

    monkeypatch.setattr(inputs.requests, "get", lambda url, **kwargs: FakeResponse())

    request = normalize_request("", "", "brochure", "https://example.com/ref.png")
    assert request.image.mime_type == "image/png"


def test_failed_download_is_encoding_error(monkeypatch):
    def fail(url, **kwargs):
        raise requests.ConnectionError("boom")

    monkeypatch.setattr(inputs.requests, "get", fail)

    with pytest.raises(EncodingError):
        normalize_request("", "", "brochure", "https://example.com/ref.png")


def test_payload_bytes_are_still_decoded():
    with pytest.raises(EncodingError):
        normalize_request("", "", "brochure", ImagePayload(b"not an image", "image/png"))


def test_empty_payload_is_encoding_error():
    with pytest.raises(EncodingError):
        normalize_request("CCTV", "", "brochure", ImagePayload(b"", "image/png"))


def test_payload_keeps_declared_mime_type(png_bytes):
    request = normalize_request("", "", "brochure", ImagePayload(png_bytes, "image/x-png"))
    assert request.image == ImagePayload(png_bytes, "image/x-png")
