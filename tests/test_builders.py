"""Tests for the store and homebrew manifest builders."""

from __future__ import annotations

from bundlecfg.builders import BundleBuilder, HomebrewBundleBuilder, StoreBundleBuilder
from bundlecfg.models.bundle import BundleContainer, BundleKind


class TestBundleBuilder:
    def test_mode_selection(self) -> None:
        builder = BundleContainer.builder("Name", BundleKind.game)
        assert isinstance(builder, BundleBuilder)
        assert isinstance(builder.store_id("S"), StoreBundleBuilder)
        assert isinstance(builder.homebrew_id("H"), HomebrewBundleBuilder)


class TestStoreBundleBuilder:
    def test_build_full(self, store_container: BundleContainer) -> None:
        bundle = store_container.bundle
        assert bundle.name == "Store Game"
        assert bundle.kind is BundleKind.game
        assert bundle.store_id == "STORE123"
        assert bundle.homebrew_id is None
        assert bundle.exec == "game.exe"
        assert bundle.version == "1.2.3"
        assert bundle.background is True
        assert bundle.prefer_xbox_mode is True
        assert bundle.launcher == "wombat"
        assert bundle.launcher_exec == "launcher.exe"
        assert bundle.launcher_tags == ["Tag1", "Tag2"]
        assert bundle.encrypted_image == "payload.img"

    def test_build_minimal_uses_defaults(self) -> None:
        bundle = BundleBuilder("Min", BundleKind.launcher_only).store_id("S").build().bundle
        assert bundle.store_id == "S"
        assert bundle.exec is None
        assert bundle.background is False
        assert bundle.launcher_tags == []
        assert bundle.launcher_exec is None
        assert bundle.encrypted_image is None

    def test_tags_without_exec_are_discarded(self) -> None:
        bundle = (
            BundleBuilder("A", BundleKind.game)
            .store_id("S")
            .provides_launcher(None, ["Tag1", "Tag2"])
            .build()
            .bundle
        )
        assert bundle.launcher_exec is None
        assert bundle.launcher_tags == []

    def test_set_provides_launcher_without_exec_keeps_previous(self) -> None:
        builder = BundleBuilder("A", BundleKind.game).store_id("S")
        builder.set_provides_launcher("first.exe", ["One"])
        builder.set_provides_launcher(None, ["Two"])
        bundle = builder.build().bundle
        assert bundle.launcher_exec == "first.exe"
        assert bundle.launcher_tags == ["One"]

    def test_provides_launcher_copies_tags(self) -> None:
        tags = ["One"]
        builder = BundleBuilder("A", BundleKind.game).store_id("S").provides_launcher("l", tags)
        tags.append("Two")
        assert builder.build().bundle.launcher_tags == ["One"]

    def test_set_style_edits(self) -> None:
        builder = BundleBuilder("A", BundleKind.game).store_id("S").exec("a.exe").background(True)
        builder.set_exec(None)
        builder.set_background(None)
        builder.set_version("2")
        builder.set_encrypted_image("img")
        builder.set_prefer_xbox_mode(True)
        builder.set_requires_launcher("wombat")
        bundle = builder.build().bundle
        assert bundle.exec is None
        assert bundle.background is False
        assert bundle.version == "2"
        assert bundle.encrypted_image == "img"
        assert bundle.prefer_xbox_mode is True
        assert bundle.launcher == "wombat"

    def test_setters_return_same_builder(self) -> None:
        builder = BundleBuilder("A", BundleKind.game).store_id("S")
        assert builder.exec("a") is builder
        assert builder.set_version(None) is builder

    def test_builder_can_build_twice(self) -> None:
        builder = BundleBuilder("A", BundleKind.game).store_id("S").version("1")
        first = builder.build()
        builder.set_version("2")
        second = builder.build()
        assert first.bundle.version == "1"
        assert second.bundle.version == "2"


class TestHomebrewBundleBuilder:
    def test_build_full(self, homebrew_container: BundleContainer) -> None:
        bundle = homebrew_container.bundle
        assert bundle.name == "Homebrew App"
        assert bundle.kind is BundleKind.application
        assert bundle.homebrew_id == "HB-1"
        assert bundle.exec == "app.sh"
        assert bundle.version == "0.9"
        assert bundle.prefer_xbox_mode is True
        assert bundle.launcher == "wombat"

    def test_store_only_fields_are_fixed(self, homebrew_container: BundleContainer) -> None:
        bundle = homebrew_container.bundle
        assert bundle.store_id is None
        assert bundle.background is False
        assert bundle.launcher_exec is None
        assert bundle.launcher_tags == []
        assert bundle.encrypted_image is None

    def test_store_only_setters_are_not_exposed(self) -> None:
        builder = BundleBuilder("A", BundleKind.game).homebrew_id("H")
        for name in (
            "background",
            "set_background",
            "provides_launcher",
            "set_provides_launcher",
            "encrypted_image",
            "set_encrypted_image",
        ):
            assert not hasattr(builder, name)

    def test_set_style_edits(self) -> None:
        builder = BundleBuilder("A", BundleKind.game).homebrew_id("H").exec("x").prefer_xbox_mode(True)
        builder.set_exec(None).set_prefer_xbox_mode(None).set_requires_launcher("l")
        bundle = builder.build().bundle
        assert bundle.exec is None
        assert bundle.prefer_xbox_mode is False
        assert bundle.launcher == "l"


class TestBuiltRecordsRoundTrip:
    def test_store(self, store_container: BundleContainer) -> None:
        assert BundleContainer.from_text(store_container.to_text()) == store_container

    def test_homebrew(self, homebrew_container: BundleContainer) -> None:
        assert BundleContainer.from_text(homebrew_container.to_text()) == homebrew_container

    def test_minimal_homebrew(self) -> None:
        container = BundleBuilder("M", BundleKind.launcher_only).homebrew_id("H").build()
        assert BundleContainer.from_text(container.to_text()) == container
