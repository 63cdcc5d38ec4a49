"""Unit tests for inline image handling."""

import base64

import pytest

from inkwell.adapter.storage import InMemoryImageStore
from inkwell.application.usecase.image import decode_image_data_url, store_image
from inkwell.domain.error import ValidationError


def data_url(data: bytes, content_type: str = "image/png") -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode()}"


class TestDecodeImageDataUrl:
    """Tests for decode_image_data_url."""

    def test_valid_image(self):
        data, content_type = decode_image_data_url(data_url(b"\x89PNG"), 1024)

        assert data == b"\x89PNG"
        assert content_type == "image/png"

    @pytest.mark.parametrize(
        "value",
        [
            "https://example.com/a.png",
            "data:text/plain;base64,aGVsbG8=",
            "data:image/png,raw",
        ],
    )
    def test_not_an_image_data_url(self, value):
        with pytest.raises(ValidationError, match="base64 data URL"):
            decode_image_data_url(value, 1024)

    def test_invalid_base64(self):
        with pytest.raises(ValidationError, match="not valid base64"):
            decode_image_data_url("data:image/png;base64,@@@@", 1024)

    def test_empty_image(self):
        with pytest.raises(ValidationError, match="empty"):
            decode_image_data_url("data:image/png;base64,", 1024)

    def test_too_large(self):
        with pytest.raises(ValidationError, match="at most 16 bytes"):
            decode_image_data_url(data_url(b"x" * 17), 16)

    def test_far_too_large_rejected_before_decoding(self):
        with pytest.raises(ValidationError, match="at most 16 bytes"):
            decode_image_data_url("data:image/png;base64," + "A" * 4000, 16)


class TestStoreImage:
    """Tests for store_image."""

    @pytest.mark.asyncio
    async def test_uploads_to_folder(self):
        store = InMemoryImageStore()

        url = await store_image(store, data_url(b"img"), folder="posts", max_bytes=1024)

        assert "/posts/" in url
        assert store.images[url] == (b"img", "image/png")

    @pytest.mark.asyncio
    async def test_unsupported_type_is_validation_error(self):
        store = InMemoryImageStore()

        with pytest.raises(ValidationError, match="Unsupported image type"):
            await store_image(
                store, data_url(b"img", "image/bmp"), folder="posts", max_bytes=1024
            )

        assert store.images == {}
