"""Error taxonomy for manifest decoding, encoding and archive transport.

Every failure is terminal for the operation that raised it: nothing here is
retried or partially recovered. Callers catch ``BundleError`` to handle all
of them at once, or one of the narrow subclasses.
"""

from __future__ import annotations


class BundleError(Exception):
    """Base class for every error raised by bundlecfg."""


class ArchiveOpenError(BundleError):
    """Raised when the container could not be opened or is not a valid zip."""


class EntryNotFound(BundleError):
    """Raised when the container has no manifest entry."""

    def __init__(self, entry: str) -> None:
        super().__init__(f"archive has no entry named '{entry}'")
        self.entry = entry


class DecodeError(BundleError):
    """Raised when manifest text cannot be turned into a record."""


class MalformedManifest(DecodeError):
    """Raised when the text does not follow the key/section grammar."""


class MissingSection(DecodeError):
    """Raised when the manifest lacks the bundle section."""

    def __init__(self, section: str) -> None:
        super().__init__(f"missing [{section}] section")
        self.section = section


class MissingField(DecodeError):
    """Raised when a required key is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f"missing required field '{field}'")
        self.field = field


class UnknownField(DecodeError):
    """Raised when the manifest carries a key the record does not define."""

    def __init__(self, field: str) -> None:
        super().__init__(f"unknown field '{field}'")
        self.field = field


class InvalidBoolean(DecodeError):
    """Raised when a boolean key holds anything but ``true`` or ``false``."""

    def __init__(self, text: str) -> None:
        super().__init__(f"not a valid Boolean value: {text!r}")
        self.text = text


class InvalidBundleKind(DecodeError):
    """Raised when ``Type`` is not one of the known bundle kinds."""

    def __init__(self, text: str) -> None:
        super().__init__(f"not a valid bundle type: {text!r}")
        self.text = text


class InvalidListElement(DecodeError):
    """Raised when one element of a delimited list fails to parse."""

    def __init__(self, index: int, cause: Exception) -> None:
        super().__init__(f"invalid list element at position {index}: {cause}")
        self.index = index
        self.cause = cause


class ConflictingIdentity(DecodeError):
    """Raised in strict mode when both StoreID and HomebrewID are present."""


class EncodeError(BundleError):
    """Raised when a record cannot be written as manifest text."""


class BundleIOError(BundleError):
    """Raised when reading or writing the underlying byte stream fails."""


# Names used by the error taxonomy in the format documentation.
InvalidArchive = ArchiveOpenError
IoError = BundleIOError


__all__ = [
    "ArchiveOpenError",
    "BundleError",
    "BundleIOError",
    "ConflictingIdentity",
    "DecodeError",
    "EncodeError",
    "EntryNotFound",
    "InvalidArchive",
    "InvalidBoolean",
    "InvalidBundleKind",
    "InvalidListElement",
    "IoError",
    "MalformedManifest",
    "MissingField",
    "MissingSection",
    "UnknownField",
]
