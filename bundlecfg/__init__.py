"""Bundle manifest codec, builders and zip transport."""

from __future__ import annotations

from bundlecfg.archive import (
    MANIFEST_ENTRY,
    read_manifest,
    read_zipfile,
    write_manifest,
    write_zipfile,
)
from bundlecfg.builders import BundleBuilder, HomebrewBundleBuilder, StoreBundleBuilder
from bundlecfg.errors import (
    ArchiveOpenError,
    BundleError,
    BundleIOError,
    ConflictingIdentity,
    DecodeError,
    EncodeError,
    EntryNotFound,
    InvalidArchive,
    InvalidBoolean,
    InvalidBundleKind,
    InvalidListElement,
    IoError,
    MalformedManifest,
    MissingField,
    MissingSection,
    UnknownField,
)
from bundlecfg.models.bundle import (
    SECTION_NAME,
    BundleContainer,
    BundleKind,
    BundleRecord,
    parse_kind,
)

__all__ = [
    "MANIFEST_ENTRY",
    "SECTION_NAME",
    "ArchiveOpenError",
    "BundleBuilder",
    "BundleContainer",
    "BundleError",
    "BundleIOError",
    "BundleKind",
    "BundleRecord",
    "ConflictingIdentity",
    "DecodeError",
    "EncodeError",
    "EntryNotFound",
    "HomebrewBundleBuilder",
    "InvalidArchive",
    "InvalidBoolean",
    "InvalidBundleKind",
    "InvalidListElement",
    "IoError",
    "MalformedManifest",
    "MissingField",
    "MissingSection",
    "StoreBundleBuilder",
    "UnknownField",
    "parse_kind",
    "read_manifest",
    "read_zipfile",
    "write_manifest",
    "write_zipfile",
]
