"""Vector and matrix math, frustum culling, lights, draw-call sorting, half floats and DDS reading."""

__version__ = "0.1.0"

__all__ = ["billboard", "dds", "drawcall", "frustum", "geometry", "half", "light", "sorting"]