"""Byte buffers (adaptor, static and block-chained) and a bounds-checked binary stream reader."""

__version__ = "1.0.0"
__all__ = ["base", "buffer_adaptor", "static_buffer", "dynamic_buffer", "stream"]