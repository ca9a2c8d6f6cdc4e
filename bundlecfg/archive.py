"""Reading and writing the manifest entry of a bundle zip archive.

The manifest lives at the archive root as ``bundle.ini``. These helpers only
move bytes between that entry and ``BundleContainer``; compression settings
are whatever the ``ZipFile`` was opened with.
"""

from __future__ import annotations

import logging
import os
import tempfile
import zipfile
import zlib
from pathlib import Path

from bundlecfg.core.logging import manifest_scope
from bundlecfg.errors import ArchiveOpenError, BundleIOError, EntryNotFound
from bundlecfg.models.bundle import BundleContainer

logger = logging.getLogger(__name__)

MANIFEST_ENTRY = "bundle.ini"


def read_manifest(
    archive: zipfile.ZipFile, *, strict_identity: bool = False
) -> BundleContainer:
    """Decode ``bundle.ini`` from an open archive."""
    with manifest_scope(entry=MANIFEST_ENTRY):
        try:
            data = archive.read(MANIFEST_ENTRY)
        except KeyError as exc:
            raise EntryNotFound(MANIFEST_ENTRY) from exc
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError) as exc:
            raise ArchiveOpenError(f"cannot read {MANIFEST_ENTRY}: {exc}") from exc
        except OSError as exc:
            raise BundleIOError(f"failed to read {MANIFEST_ENTRY}: {exc}") from exc

        container = BundleContainer.from_bytes(data, strict_identity=strict_identity)
        logger.debug("read %d byte manifest from archive", len(data))
        return container


def write_manifest(archive: zipfile.ZipFile, container: BundleContainer) -> None:
    """Add ``bundle.ini`` to an archive opened for writing.

    ``zipfile`` cannot replace a member in place; use ``write_zipfile`` to
    overwrite the manifest of an existing archive on disk.
    """
    data = container.to_bytes()
    with manifest_scope(entry=MANIFEST_ENTRY):
        try:
            archive.writestr(MANIFEST_ENTRY, data)
        except ValueError as exc:
            raise ArchiveOpenError(f"archive is not open for writing: {exc}") from exc
        except OSError as exc:
            raise BundleIOError(f"failed to write {MANIFEST_ENTRY}: {exc}") from exc
        logger.debug("wrote %d byte manifest to archive", len(data))


def read_zipfile(path: str | Path, *, strict_identity: bool = False) -> BundleContainer:
    """Open the zip at *path* and decode its manifest."""
    archive_path = Path(path)
    with manifest_scope(source=str(archive_path)):
        try:
            with zipfile.ZipFile(archive_path) as archive:
                return read_manifest(archive, strict_identity=strict_identity)
        except zipfile.BadZipFile as exc:
            raise ArchiveOpenError(f"'{archive_path}' is not a valid zip file") from exc
        except OSError as exc:
            raise BundleIOError(f"failed to open {archive_path}: {exc}") from exc


def write_zipfile(path: str | Path, container: BundleContainer) -> None:
    """Write the manifest into the zip at *path*, creating it if needed.

    An existing ``bundle.ini`` is replaced by rewriting the archive next to
    the original and swapping it in, so other entries are kept as they were.
    """
    archive_path = Path(path)
    with manifest_scope(source=str(archive_path)):
        try:
            if not archive_path.exists():
                with zipfile.ZipFile(archive_path, "w") as archive:
                    write_manifest(archive, container)
                return

            with zipfile.ZipFile(archive_path) as existing:
                has_manifest = MANIFEST_ENTRY in existing.namelist()

            if not has_manifest:
                with zipfile.ZipFile(archive_path, "a") as archive:
                    write_manifest(archive, container)
                return

            _replace_manifest(archive_path, container)
        except (zipfile.BadZipFile, zlib.error, EOFError) as exc:
            raise ArchiveOpenError(f"'{archive_path}' is not a valid zip file") from exc
        except OSError as exc:
            raise BundleIOError(f"failed to update {archive_path}: {exc}") from exc


def _replace_manifest(archive_path: Path, container: BundleContainer) -> None:
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{archive_path.name}.", suffix=".tmp", dir=archive_path.parent
    )
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        with zipfile.ZipFile(archive_path) as source, zipfile.ZipFile(tmp_path, "w") as target:
            target.comment = source.comment
            for info in source.infolist():
                if info.filename == MANIFEST_ENTRY:
                    continue
                target.writestr(info, source.read(info))
            write_manifest(target, container)
        os.replace(tmp_path, archive_path)
    finally:
        tmp_path.unlink(missing_ok=True)
    logger.debug("replaced existing manifest entry")


__all__ = [
    "MANIFEST_ENTRY",
    "read_manifest",
    "read_zipfile",
    "write_manifest",
    "write_zipfile",
]
