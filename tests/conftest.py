import json
from io import BytesIO

import pytest
from PIL import Image

from creative_lab.models import ImagePayload
from creative_lab.services import CreativeService

COPY = {
    "headline": "Eyes That Never Sleep",
    "subtext": "8 channels. Full night vision. Just ₹4999.",
    "CTA": "Secure Your Peace of Mind",
    "layout_description": "A quiet suburban street at dusk, rule of thirds, cool blue palette.",
    "festival_theme": "",
}


def make_png(size=(4, 4), color="red") -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


class FakeCopyClient:
    def __init__(self, response=None):
        self.response = json.dumps(COPY) if response is None else response
        self.calls = []

    def generate_json(self, prompt, schema, image=None, name=""):
        self.calls.append({"prompt": prompt, "schema": schema, "image": image, "name": name})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeImageClient:
    def __init__(self, images=None, edited=None):
        self.images = [ImagePayload(b"jpeg-bytes", "image/jpeg")] if images is None else images
        self.edited = ImagePayload(b"png-bytes", "image/png") if edited is None else edited
        self.generate_calls = []
        self.edit_calls = []

    def generate_images(self, prompt, aspect_ratio="1:1", mime_type="image/jpeg", count=1):
        self.generate_calls.append({
            "prompt": prompt, "aspect_ratio": aspect_ratio, "mime_type": mime_type, "count": count,
        })
        return self.images

    def edit_image(self, prompt, image):
        self.edit_calls.append({"prompt": prompt, "image": image})
        return self.edited


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def copy_client():
    return FakeCopyClient()


@pytest.fixture
def image_client():
    return FakeImageClient()


@pytest.fixture
def service(copy_client, image_client):
    return CreativeService(copy_client, image_client, brand="MegaTech Solutions")
