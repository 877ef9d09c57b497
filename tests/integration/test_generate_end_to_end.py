"""End-to-end generation: capture, palette, normalize, upload, result."""

from __future__ import annotations

from io import BytesIO
from typing import Any

import httpx
import pytest
from PIL import Image

from pbnstudio.core.api.http.config import HttpClientConfig
from pbnstudio.core.generation.client import GenerationClient
from pbnstudio.core.imaging.source import SourceImage
from pbnstudio.core.palette.store import PaletteStore
from pbnstudio.core.session import StudioSession
from tests.helpers import BASE_URL, form_fields, image_bytes, json_response, parse_multipart

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_capture_to_template() -> None:
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        _, upload = parse_multipart(request)["file"]
        with Image.open(BytesIO(upload)) as img:
            seen["upload_size"] = img.size
            seen["upload_format"] = img.format
        seen["fields"] = form_fields(request)
        return json_response(
            {
                "success": True,
                "preview": "data:image/png;base64,iVBORw0KGgo=",
                "template": "data:image/png;base64,iVBORw0KGgo=",
                "region_count": 120,
                "colorsUsed": 2,
                "dimensions": {"width": 800, "height": 400},
            }
        )

    palette = PaletteStore()
    client = GenerationClient(
        HttpClientConfig(base_url=BASE_URL), transport=httpx.MockTransport(handler)
    )
    async with client:
        session = StudioSession(client, palette)
        assert session.palette is palette

        # Two paints scanned from swatch photos
        red = await session.scan_color(SourceImage.from_bytes(image_bytes(color=(220, 20, 20))))
        blue = await session.scan_color(SourceImage.from_bytes(image_bytes(color=(20, 20, 220))))
        assert (red.id, blue.id) == ("1", "2")
        assert palette.ids == ["1", "2"]

        session.set_image(SourceImage.from_bytes(image_bytes(2000, 1000), name="capture.png"))
        progress: list[float] = []
        result = await session.generate(50, on_progress=progress.append)

    assert result is not None
    assert seen["upload_format"] == "JPEG"
    width, height = seen["upload_size"]
    assert width <= 1200 and height <= 600
    assert seen["fields"]["threshold"] == "50"

    assert (result.dimensions.width, result.dimensions.height) == (800, 400)
    assert result.region_count == 120
    assert result.colors_used == 2
    assert session.result is result
    assert progress[-1] == 100.0
    assert progress == sorted(progress)
