from __future__ import annotations

from bundlecfg.codec.ini import parse_sections, render_section
from bundlecfg.codec.scalars import (
    LIST_DELIMITER,
    decode_bool,
    decode_list,
    encode_bool,
    encode_list,
)

__all__ = [
    "LIST_DELIMITER",
    "decode_bool",
    "decode_list",
    "encode_bool",
    "encode_list",
    "parse_sections",
    "render_section",
]
