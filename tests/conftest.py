"""Shared fixtures for building image payloads."""

import base64
import io

import pytest
from PIL import Image


def _image_bytes(size=(1600, 900), mode="RGB", fmt="PNG", color=(200, 40, 90)):
    if mode == "RGBA":
        color = color + (128,)
    img = Image.new(mode, size, color)
    out = io.BytesIO()
    img.save(out, fmt)
    return out.getvalue()


def _data_url(raw: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


@pytest.fixture()
def image_bytes():
    return _image_bytes


@pytest.fixture()
def data_url():
    return _data_url
