"""Guided construction of bundle manifests.

``BundleBuilder`` picks the identification mode: ``store_id`` for bundles
with an externally issued catalog identity, ``homebrew_id`` for locally
assigned ones. Each mode's builder only exposes the fields that make sense
for it; everything else is left at its default by ``build()``.

Every builder offers two setter styles. ``with``-style setters
(``exec``, ``version``, ...) are meant for one-shot chains; ``set_*`` setters
take optional values and are meant for incremental edits, where ``None``
clears the field. Both return the builder.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Self

from bundlecfg.models.bundle import BundleContainer, BundleKind, BundleRecord


class BundleBuilder:
    """Entry point holding the two required fields until a mode is chosen."""

    def __init__(self, name: str, kind: BundleKind) -> None:
        self._name = name
        self._kind = kind

    def store_id(self, store_id: str) -> StoreBundleBuilder:
        return StoreBundleBuilder(self._name, self._kind, store_id)

    def homebrew_id(self, homebrew_id: str) -> HomebrewBundleBuilder:
        return HomebrewBundleBuilder(self._name, self._kind, homebrew_id)


class _BaseBundleBuilder:
    """Fields shared by both identification modes."""

    def __init__(self, name: str, kind: BundleKind) -> None:
        self._name = name
        self._kind = kind
        self._exec: str | None = None
        self._version: str | None = None
        self._prefer_xbox_mode = False
        self._launcher: str | None = None

    def exec(self, exec_path: str) -> Self:
        self._exec = exec_path
        return self

    def version(self, version: str) -> Self:
        self._version = version
        return self

    def prefer_xbox_mode(self, prefer_xbox_mode: bool) -> Self:
        self._prefer_xbox_mode = prefer_xbox_mode
        return self

    def requires_launcher(self, launcher: str) -> Self:
        self._launcher = launcher
        return self

    def set_exec(self, exec_path: str | None) -> Self:
        self._exec = exec_path
        return self

    def set_version(self, version: str | None) -> Self:
        self._version = version
        return self

    def set_prefer_xbox_mode(self, prefer_xbox_mode: bool | None) -> Self:
        self._prefer_xbox_mode = bool(prefer_xbox_mode)
        return self

    def set_requires_launcher(self, launcher: str | None) -> Self:
        self._launcher = launcher
        return self


class StoreBundleBuilder(_BaseBundleBuilder):
    """Builder for bundles identified by a catalog-issued store ID."""

    def __init__(self, name: str, kind: BundleKind, store_id: str) -> None:
        super().__init__(name, kind)
        self._store_id = store_id
        self._background = False
        self._launcher_exec: str | None = None
        self._launcher_tags: list[str] = []
        self._encrypted_image: str | None = None

    def background(self, background: bool) -> Self:
        self._background = background
        return self

    def provides_launcher(self, exec_path: str | None, tags: Iterable[str]) -> Self:
        """Declare that this bundle is itself a launcher.

        The executable and its tags are applied together. Tags without an
        executable mean nothing, so without *exec_path* the call is a no-op.
        """
        if exec_path is not None:
            self._launcher_exec = exec_path
            self._launcher_tags = list(tags)
        return self

    def encrypted_image(self, encrypted_image: str) -> Self:
        self._encrypted_image = encrypted_image
        return self

    def set_background(self, background: bool | None) -> Self:
        self._background = bool(background)
        return self

    def set_provides_launcher(self, exec_path: str | None, tags: Iterable[str]) -> Self:
        return self.provides_launcher(exec_path, tags)

    def set_encrypted_image(self, encrypted_image: str | None) -> Self:
        self._encrypted_image = encrypted_image
        return self

    def build(self) -> BundleContainer:
        record = BundleRecord(
            name=self._name,
            kind=self._kind,
            store_id=self._store_id,
            homebrew_id=None,
            exec=self._exec,
            encrypted_image=self._encrypted_image,
            version=self._version,
            background=self._background,
            prefer_xbox_mode=self._prefer_xbox_mode,
            launcher=self._launcher,
            launcher_tags=list(self._launcher_tags),
            launcher_exec=self._launcher_exec,
        )
        return BundleContainer(bundle=record)


class HomebrewBundleBuilder(_BaseBundleBuilder):
    """Builder for bundles with a locally assigned homebrew ID.

    Homebrew bundles never run in the background, never provide a launcher
    and never ship an encrypted image, so those fields have no setters here.
    """

    def __init__(self, name: str, kind: BundleKind, homebrew_id: str) -> None:
        super().__init__(name, kind)
        self._homebrew_id = homebrew_id

    def build(self) -> BundleContainer:
        record = BundleRecord(
            name=self._name,
            kind=self._kind,
            store_id=None,
            homebrew_id=self._homebrew_id,
            exec=self._exec,
            version=self._version,
            prefer_xbox_mode=self._prefer_xbox_mode,
            launcher=self._launcher,
        )
        return BundleContainer(bundle=record)


__all__ = [
    "BundleBuilder",
    "HomebrewBundleBuilder",
    "StoreBundleBuilder",
]
