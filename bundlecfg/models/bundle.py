"""Bundle manifest models and their key/value (de)serialization contract."""

from __future__ import annotations

import io
import logging
import zipfile
from enum import StrEnum
from pathlib import Path
from typing import IO, TYPE_CHECKING, Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    ValidationError,
)

from bundlecfg.codec.ini import parse_sections, render_section
from bundlecfg.codec.scalars import (
    LIST_DELIMITER,
    decode_bool,
    decode_list,
    encode_bool,
    encode_list,
)
from bundlecfg.core.logging import manifest_scope
from bundlecfg.errors import (
    BundleIOError,
    ConflictingIdentity,
    DecodeError,
    EncodeError,
    InvalidBundleKind,
    MalformedManifest,
    MissingField,
    MissingSection,
    UnknownField,
)

if TYPE_CHECKING:
    from bundlecfg.builders import BundleBuilder

logger = logging.getLogger(__name__)

SECTION_NAME = "Bundle"
ENCODING = "utf-8"


class BundleKind(StrEnum):
    game = "Game"
    application = "Application"
    launcher_only = "LauncherOnly"


def parse_kind(text: str) -> BundleKind:
    """Exact, case-sensitive match against the bundle kind tokens."""
    for kind in BundleKind:
        if kind.value == text:
            return kind
    raise InvalidBundleKind(text)


def _validate_kind(value: object) -> object:
    if isinstance(value, BundleKind):
        return value
    if isinstance(value, str):
        return parse_kind(value)
    return value


def _validate_keyfile_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return decode_bool(value)
    raise ValueError("expected a bool or the text 'true'/'false'")


def _validate_keyfile_list(value: object) -> list[str]:
    if isinstance(value, str):
        return decode_list(value)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ValueError("expected a list of strings or ';'-delimited text")


# The key/value grammar has no native booleans or lists, so these fields
# carry their own text codecs.
KeyfileBool = Annotated[
    bool,
    PlainValidator(_validate_keyfile_bool),
    PlainSerializer(encode_bool, return_type=str),
]
KeyfileList = Annotated[
    list[str],
    PlainValidator(_validate_keyfile_list),
    PlainSerializer(encode_list, return_type=str),
]
Kind = Annotated[BundleKind, BeforeValidator(_validate_kind)]


class BundleRecord(BaseModel):
    """Launch metadata for one packaged application.

    Exactly one of ``store_id`` / ``homebrew_id`` is meant to identify the
    bundle. The model itself does not enforce that; the builders do.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(alias="Name")
    kind: Kind = Field(alias="Type")
    store_id: str | None = Field(default=None, alias="StoreID")
    homebrew_id: str | None = Field(default=None, alias="HomebrewID")
    exec: str | None = Field(default=None, alias="Exec")
    encrypted_image: str | None = Field(default=None, alias="EncryptedImage")
    version: str | None = Field(default=None, alias="Version")
    background: KeyfileBool = Field(default=False, alias="Background")
    prefer_xbox_mode: KeyfileBool = Field(default=False, alias="PreferXBoxMode")
    launcher: str | None = Field(default=None, alias="Launcher")
    launcher_tags: KeyfileList = Field(default_factory=list, alias="LauncherTags")
    launcher_exec: str | None = Field(default=None, alias="LauncherExec")

    @classmethod
    def keys(cls) -> list[str]:
        """On-disk keys in the order they are written."""
        return [field.alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def from_section(
        cls, values: dict[str, str], *, strict_identity: bool = False
    ) -> BundleRecord:
        """Decode the raw ``Key -> text`` pairs of the bundle section."""
        known = set(cls.keys())
        for key in values:
            if key not in known:
                raise UnknownField(key)

        for name, field in cls.model_fields.items():
            key = field.alias or name
            if field.is_required() and key not in values:
                raise MissingField(key)

        if strict_identity and "StoreID" in values and "HomebrewID" in values:
            raise ConflictingIdentity("StoreID and HomebrewID are mutually exclusive")

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise DecodeError(f"invalid bundle section: {exc}") from exc

    def to_section(self) -> dict[str, str]:
        """Encode as ``Key -> text`` pairs, leaving out empty optional fields."""
        for tag in self.launcher_tags:
            if LIST_DELIMITER in tag:
                raise EncodeError(f"launcher tag {tag!r} contains the list delimiter")
        if self.launcher_tags and self.launcher_tags[-1] == "":
            # a trailing empty tag reads back as a dropped trailing delimiter
            raise EncodeError("last launcher tag must not be empty")
        return self.model_dump(mode="json", by_alias=True, exclude=self._empty_fields())

    def _empty_fields(self) -> set[str]:
        empty: set[str] = set()
        for name, field in type(self).model_fields.items():
            if field.is_required():
                continue
            value = getattr(self, name)
            if value is None or value is False or value == []:
                empty.add(name)
        return empty


class BundleContainer(BaseModel):
    """The manifest document: one ``[Bundle]`` section holding the record."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    bundle: BundleRecord = Field(alias=SECTION_NAME)

    @classmethod
    def builder(cls, name: str, kind: BundleKind) -> BundleBuilder:
        from bundlecfg.builders import BundleBuilder

        return BundleBuilder(name, kind)

    # -- text / bytes ---------------------------------------------------------

    @classmethod
    def from_text(cls, text: str, *, strict_identity: bool = False) -> BundleContainer:
        sections = parse_sections(text)
        for section in sections:
            if section != SECTION_NAME:
                logger.debug("ignoring manifest section [%s]", section)
        if SECTION_NAME not in sections:
            raise MissingSection(SECTION_NAME)

        record = BundleRecord.from_section(
            sections[SECTION_NAME], strict_identity=strict_identity
        )
        logger.debug("decoded bundle manifest for %r", record.name)
        return cls(bundle=record)

    @classmethod
    def from_bytes(cls, data: bytes, *, strict_identity: bool = False) -> BundleContainer:
        try:
            # utf-8-sig also accepts a leading byte-order mark
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedManifest(f"manifest is not valid {ENCODING}: {exc}") from exc
        return cls.from_text(text, strict_identity=strict_identity)

    @classmethod
    def from_read(cls, read: IO[Any], *, strict_identity: bool = False) -> BundleContainer:
        """Decode from a readable text or binary stream."""
        try:
            data = read.read()
        except OSError as exc:
            raise BundleIOError(f"failed to read manifest: {exc}") from exc
        if isinstance(data, bytes):
            return cls.from_bytes(data, strict_identity=strict_identity)
        return cls.from_text(data, strict_identity=strict_identity)

    @classmethod
    def from_file(cls, path: str | Path, *, strict_identity: bool = False) -> BundleContainer:
        manifest_path = Path(path)
        with manifest_scope(source=str(manifest_path)):
            try:
                data = manifest_path.read_bytes()
            except OSError as exc:
                raise BundleIOError(f"failed to read {manifest_path}: {exc}") from exc
            return cls.from_bytes(data, strict_identity=strict_identity)

    def to_text(self) -> str:
        return render_section(SECTION_NAME, self.bundle.to_section())

    def to_bytes(self) -> bytes:
        return self.to_text().encode(ENCODING)

    def to_write(self, write: IO[Any]) -> None:
        """Encode into a writable stream; binary streams get UTF-8 bytes."""
        text = self.to_text()
        try:
            if isinstance(write, io.TextIOBase):
                write.write(text)
            else:
                write.write(text.encode(ENCODING))
        except OSError as exc:
            raise BundleIOError(f"failed to write manifest: {exc}") from exc

    def to_file(self, path: str | Path) -> None:
        manifest_path = Path(path)
        data = self.to_bytes()
        with manifest_scope(source=str(manifest_path)):
            try:
                manifest_path.write_bytes(data)
            except OSError as exc:
                raise BundleIOError(f"failed to write {manifest_path}: {exc}") from exc
            logger.debug("wrote bundle manifest to %s", manifest_path)

    # -- archives -------------------------------------------------------------

    @classmethod
    def from_archive(
        cls, archive: zipfile.ZipFile, *, strict_identity: bool = False
    ) -> BundleContainer:
        from bundlecfg.archive import read_manifest

        return read_manifest(archive, strict_identity=strict_identity)

    @classmethod
    def from_zipfile(cls, path: str | Path, *, strict_identity: bool = False) -> BundleContainer:
        from bundlecfg.archive import read_zipfile

        return read_zipfile(path, strict_identity=strict_identity)

    def to_archive(self, archive: zipfile.ZipFile) -> None:
        from bundlecfg.archive import write_manifest

        write_manifest(archive, self)

    def to_zipfile(self, path: str | Path) -> None:
        from bundlecfg.archive import write_zipfile

        write_zipfile(path, self)


__all__ = [
    "ENCODING",
    "SECTION_NAME",
    "BundleContainer",
    "BundleKind",
    "BundleRecord",
    "KeyfileBool",
    "KeyfileList",
    "parse_kind",
]
