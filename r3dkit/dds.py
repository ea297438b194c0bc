"""Reader for uncompressed two-channel float DDS textures (RG16F and RG32F).

Only the base level is read; mipmaps are ignored.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

DXGI_FORMAT_R16G16_FLOAT = 111
DXGI_FORMAT_R32G32_FLOAT = 112

_MAGIC = 0x20534444  # "DDS "
_FOURCC_DX10 = 0x30315844  # "DX10"
_DDPF_FOURCC = 0x4

_HEADER = struct.Struct("<31I")
_DX10_HEADER = struct.Struct("<5I")
_PIXEL_FORMAT_START = 18

_FORMAT_SIZES = {
    DXGI_FORMAT_R16G16_FLOAT: 4,
    DXGI_FORMAT_R32G32_FLOAT: 8,
}


class DdsError(ValueError):
    """Raised when DDS data is malformed or in an unsupported format."""


@dataclass(frozen=True)
class DdsImage:
    """Pixel data of a DDS base level."""

    width: int
    height: int
    format_size: int
    dxgi_format: int
    data: bytes


def load_dds(data: bytes) -> DdsImage:
    """Parse an RG16F or RG32F DDS image held in memory."""
    data = bytes(data)
    if len(data) < _HEADER.size + 4:
        raise DdsError("data too short for a DDS header")

    (magic,) = struct.unpack_from("<I", data, 0)
    if magic != _MAGIC:
        raise DdsError("missing DDS magic number")

    header = _HEADER.unpack_from(data, 4)
    if header[0] != _HEADER.size:
        raise DdsError(f"unexpected DDS header size {header[0]}")
    height, width = header[2], header[3]
    (_, pf_flags, fourcc, rgb_bit_count, r_mask, g_mask, _, _) = header[
        _PIXEL_FORMAT_START:_PIXEL_FORMAT_START + 8
    ]

    offset = 4 + _HEADER.size
    dxgi_format = 0
    if pf_flags & _DDPF_FOURCC and fourcc == _FOURCC_DX10:
        if len(data) < offset + _DX10_HEADER.size:
            raise DdsError("data too short for the DX10 header")
        dxgi_format = _DX10_HEADER.unpack_from(data, offset)[0]
        offset += _DX10_HEADER.size
    elif rgb_bit_count == 32 and r_mask == 0x0000FFFF and g_mask == 0xFFFF0000:
        dxgi_format = DXGI_FORMAT_R16G16_FLOAT

    format_size = _FORMAT_SIZES.get(dxgi_format)
    if format_size is None:
        raise DdsError(f"unsupported DDS pixel format {dxgi_format}")

    size = width * height * format_size
    if len(data) < offset + size:
        raise DdsError("pixel data is truncated")

    return DdsImage(
        width=width,
        height=height,
        format_size=format_size,
        dxgi_format=dxgi_format,
        data=data[offset:offset + size],
    )


def load_dds_file(path: str | PathLike[str]) -> DdsImage:
    """Read and parse a DDS file from disk."""
    return load_dds(Path(path).read_bytes())