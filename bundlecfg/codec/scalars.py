"""Text codecs for values the key/value grammar has no native form for.

Both codecs are plain ``text -> value`` / ``value -> text`` functions so the
record model can attach them per field.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from bundlecfg.errors import InvalidBoolean, InvalidListElement

T = TypeVar("T")

LIST_DELIMITER = ";"

_TRUE = "true"
_FALSE = "false"


def encode_bool(value: bool) -> str:
    return _TRUE if value else _FALSE


def decode_bool(text: str) -> bool:
    """Parse the literal ``true``/``false`` tokens (case-sensitive)."""
    if text == _TRUE:
        return True
    if text == _FALSE:
        return False
    raise InvalidBoolean(text)


def encode_list(values: Iterable[T], render: Callable[[T], str] = str) -> str:
    """Join elements with ``;``; an empty list gives an empty string."""
    return LIST_DELIMITER.join(render(value) for value in values)


def decode_list(text: str | None, parse: Callable[[str], T] = str) -> list[T]:  # type: ignore[assignment]
    """Split a ``;``-delimited scalar into parsed elements.

    A single trailing empty segment is dropped, so ``"A;B;"`` and ``"A;B"``
    decode the same. Interior empty segments are kept and handed to *parse*.
    ``None`` (key absent) decodes to an empty list.
    """
    if text is None:
        return []

    segments = text.split(LIST_DELIMITER)
    if segments and segments[-1] == "":
        segments.pop()

    result: list[T] = []
    for index, segment in enumerate(segments):
        try:
            result.append(parse(segment))
        except Exception as exc:  # noqa: BLE001
            raise InvalidListElement(index, exc) from exc
    return result


__all__ = [
    "LIST_DELIMITER",
    "decode_bool",
    "decode_list",
    "encode_bool",
    "encode_list",
]
