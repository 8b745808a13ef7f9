"""Shared fixtures for synthetic test images."""

import struct
import zlib

import cv2
import numpy as np
import pytest


def encode_png(img: np.ndarray) -> bytes:
    """Encode a numpy image to PNG bytes."""
    success, buffer = cv2.imencode(".png", img)
    if not success:
        raise ValueError("Failed to encode test image")
    return buffer.tobytes()


@pytest.fixture
def black_png():
    """Completely black 3-channel image - 48x72 pixels."""
    return encode_png(np.zeros((72, 48, 3), dtype=np.uint8))


@pytest.fixture
def white_png():
    """Completely white 3-channel image - 48x72 pixels."""
    return encode_png(np.full((72, 48, 3), 255, dtype=np.uint8))


@pytest.fixture
def noise_png():
    """Random noise image; deterministic seed."""
    rng = np.random.default_rng(42)
    return encode_png(rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8))


@pytest.fixture
def half_black_png():
    """Left half black, right half white - 112x24 pixels."""
    img = np.full((24, 112, 3), 255, dtype=np.uint8)
    img[:, :56] = 0
    return encode_png(img)


@pytest.fixture
def truncated_png():
    """PNG whose header is intact but whose pixel data is cut short."""
    rng = np.random.default_rng(7)
    data = encode_png(rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8))
    return data[: len(data) // 2]


@pytest.fixture
def png_encoder():
    """Factory fixture: encode an arbitrary numpy image to PNG bytes."""
    return encode_png


def png_header(width: int, height: int) -> bytes:
    """Minimal well-formed PNG that declares width x height but holds one scanline byte."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b"\x00"))
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def oversized_png():
    """PNG header declaring 30000x30000 pixels (900M), beyond Pillow's bomb limit."""
    return png_header(30000, 30000)
