import json

import pytest

from creative_lab.errors import GenerationRefusedError, MalformedResponseError, ServiceError, ValidationError
from creative_lab.models import ImagePayload
from creative_lab.services import CreativeService, GenerationState

from .conftest import COPY, FakeCopyClient, FakeImageClient


def total_calls(copy_client, image_client):
    return len(copy_client.calls) + len(image_client.generate_calls) + len(image_client.edit_calls)


def test_empty_input_makes_no_calls(service, copy_client, image_client):
    with pytest.raises(ValidationError):
        service.generate("", "", "instagram_post", None)

    assert total_calls(copy_client, image_client) == 0


def test_product_only_instagram_post(service, copy_client, image_client):
    output = service.generate("New 8-channel CCTV, night vision, ₹4999", "", "instagram_post", None)

    assert len(copy_client.calls) == 1
    assert copy_client.calls[0]["image"] is None
    assert copy_client.calls[0]["name"] == "creative_copy"
    assert len(image_client.generate_calls) == 1
    assert image_client.generate_calls[0]["aspect_ratio"] == "1:1"
    assert image_client.generate_calls[0]["mime_type"] == "image/jpeg"
    assert image_client.generate_calls[0]["count"] == 1
    assert image_client.edit_calls == []
    assert output.json.CTA
    assert output.visual_url.startswith("data:image/jpeg;base64,")
    assert service.last_run.state is GenerationState.DONE


def test_occasion_only_banner(image_client):
    copy = dict(COPY, CTA="", festival_theme="Saffron, gold and diya lamps")
    copy_client = FakeCopyClient(json.dumps(copy))
    service = CreativeService(copy_client, image_client)

    output = service.generate("", "Diwali", "banner", None)

    assert '"Diwali". This is the primary theme' in copy_client.calls[0]["prompt"]
    assert image_client.generate_calls[0]["aspect_ratio"] == "16:9"
    assert "Thematic Elements: Saffron, gold and diya lamps" in image_client.generate_calls[0]["prompt"]
    assert output.json.festival_theme


def test_reference_image_brochure_uses_edit(service, copy_client, image_client, png_bytes):
    output = service.generate("", "", "brochure", png_bytes)

    assert image_client.generate_calls == []
    assert len(image_client.edit_calls) == 1
    assert image_client.edit_calls[0]["image"] == ImagePayload(png_bytes, "image/png")
    assert COPY["layout_description"] in image_client.edit_calls[0]["prompt"]
    assert copy_client.calls[0]["image"].data == png_bytes
    assert "directly inspired by or enhance this image" in copy_client.calls[0]["prompt"]
    assert output.mime_type == "image/png"
    assert output.image_bytes() == b"png-bytes"


def test_malformed_copy_stops_pipeline(image_client):
    copy_client = FakeCopyClient("Sure! Here's your creative: {headline: ...")
    service = CreativeService(copy_client, image_client)

    with pytest.raises(MalformedResponseError) as exc:
        service.generate("CCTV", "", "banner")

    assert "invalid format" in exc.value.message
    assert total_calls(copy_client, image_client) == 1
    assert service.last_run.state is GenerationState.FAILED
    assert service.last_run.history == [
        GenerationState.IDLE, GenerationState.GENERATING_COPY, GenerationState.FAILED,
    ]


@pytest.mark.parametrize("raw", ["[]", '{"headline": "only"}', '{"headline": 1, "subtext": "", "CTA": "", "layout_description": ""}', ""])
def test_wrong_json_shape_is_malformed(raw, image_client):
    service = CreativeService(FakeCopyClient(raw), image_client)

    with pytest.raises(MalformedResponseError):
        service.generate("CCTV", "", "banner")
    assert image_client.generate_calls == []


def test_zero_generated_images_is_refusal(copy_client):
    image_client = FakeImageClient(images=[])
    service = CreativeService(copy_client, image_client)

    with pytest.raises(GenerationRefusedError) as exc:
        service.generate("CCTV", "", "banner")

    assert "modifying your request" in exc.value.message
    assert service.last_run.history[-2:] == [GenerationState.GENERATING_VISUAL, GenerationState.FAILED]


def test_no_edited_image_is_refusal(copy_client, png_bytes):
    image_client = FakeImageClient()
    image_client.edited = None
    service = CreativeService(copy_client, image_client)

    with pytest.raises(GenerationRefusedError):
        service.generate("", "", "brochure", png_bytes)


def test_service_error_propagates(image_client):
    service = CreativeService(FakeCopyClient(ServiceError("down")), image_client)

    with pytest.raises(ServiceError):
        service.generate("CCTV", "", "banner")
    assert image_client.generate_calls == []


def test_unexpected_error_is_wrapped(copy_client):
    class BrokenImageClient(FakeImageClient):
        def generate_images(self, *args, **kwargs):
            raise RuntimeError("socket closed")

    service = CreativeService(copy_client, BrokenImageClient())

    with pytest.raises(ServiceError) as exc:
        service.generate("CCTV", "", "banner")
    assert "try again" in exc.value.message
    assert service.last_run.output is None


def test_service_can_run_again_after_failure(copy_client, image_client):
    service = CreativeService(copy_client, image_client)
    with pytest.raises(ValidationError):
        service.generate("", "", "banner")

    assert service.generate("CCTV", "", "banner").json.headline == COPY["headline"]
