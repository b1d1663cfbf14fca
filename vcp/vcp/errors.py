# vcp/vcp/errors.py
from __future__ import annotations


class VcpError(RuntimeError):
    pass


class InputFormatError(VcpError):
    """Raised by the reader when an input file does not follow the text format."""


class MalformedReferenceError(VcpError):
    """A request or latency record cites an unknown video, cache or endpoint id."""
