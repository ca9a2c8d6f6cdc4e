"""Logging for manifest reads and writes.

Library modules log at debug level only. ``manifest_scope`` records which
file and archive entry is being processed, and the filter below copies that
onto every record so a log line can be traced back to its manifest.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(manifest_location)s] %(message)s"


@dataclass(frozen=True, slots=True)
class ManifestContext:
    """Where the manifest currently being read or written lives.

    ``source`` is a file or archive path; ``entry`` is the archive member.
    """

    source: str | None = None
    entry: str | None = None

    @property
    def location(self) -> str:
        if self.source and self.entry:
            return f"{self.source}!{self.entry}"
        return self.source or self.entry or "-"


_EMPTY_CONTEXT = ManifestContext()
_MANIFEST_CONTEXT: contextvars.ContextVar[ManifestContext | None] = contextvars.ContextVar(
    "bundlecfg_manifest_context",
    default=None,
)


def get_manifest_context() -> ManifestContext:
    return _MANIFEST_CONTEXT.get() or _EMPTY_CONTEXT


class ManifestContextFilter(logging.Filter):
    """Stamp records with the manifest source, entry and combined location."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_manifest_context()
        record.manifest_source = context.source
        record.manifest_entry = context.entry
        record.manifest_location = context.location
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per line, with the manifest fields as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object | None] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "source": getattr(record, "manifest_source", None),
            "entry": getattr(record, "manifest_entry", None),
            "message": record.getMessage(),
        }
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """Route all logging to stdout, as text or JSON lines.

    Replaces any handlers already on the root logger, so calling it again
    (as each CLI invocation does) does not duplicate output.
    """

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_output else logging.Formatter(_TEXT_FORMAT))
    handler.addFilter(ManifestContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


@contextmanager
def manifest_scope(
    *,
    source: str | None = None,
    entry: str | None = None,
) -> Iterator[None]:
    """Mark log records emitted inside the block with a manifest location.

    Values left as ``None`` keep whatever an enclosing scope set, so opening
    an archive and then its entry yields both path and entry name.
    """

    current = get_manifest_context()
    token = _MANIFEST_CONTEXT.set(
        ManifestContext(
            source=source if source is not None else current.source,
            entry=entry if entry is not None else current.entry,
        )
    )
    try:
        yield
    finally:
        _MANIFEST_CONTEXT.reset(token)


__all__ = [
    "ManifestContext",
    "ManifestContextFilter",
    "get_manifest_context",
    "manifest_scope",
    "setup_logging",
]
