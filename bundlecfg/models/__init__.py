from __future__ import annotations

from bundlecfg.models.bundle import (
    SECTION_NAME,
    BundleContainer,
    BundleKind,
    BundleRecord,
    parse_kind,
)

__all__ = [
    "SECTION_NAME",
    "BundleContainer",
    "BundleKind",
    "BundleRecord",
    "parse_kind",
]
