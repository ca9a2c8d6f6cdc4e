from __future__ import annotations

import pytest
from bundlecfg.builders import BundleBuilder
from bundlecfg.models.bundle import BundleContainer, BundleKind

FULL_STORE_MANIFEST = """
[Bundle]
Name=Test Name With Spaces
Type=Game
Exec=TestStoreID.exe
StoreID=TestStoreID
Version=10213 124213 sfsd alpha
Background=true
PreferXBoxMode=true
Launcher=wombat
LauncherTags=Tag1;Tag2;Tag3;Tag4
LauncherExec=TestStoreID_Launcher.exe
"""

FULL_HOMEBREW_MANIFEST = """
[Bundle]
Name=Test Name With Spaces
Type=Application
Exec=TestHomebrewID.exe
HomebrewID=TestHomebrewID
Version=10213 124213 sfsd alpha
PreferXBoxMode=true
Launcher=wombat
"""

ENCRYPTED_IMAGE_MANIFEST = """
[Bundle]
Name=Gamepad
Type=Application
StoreID=DummyStoreID
Version=5
EncryptedImage=bundle.img
"""


@pytest.fixture
def store_container() -> BundleContainer:
    return (
        BundleBuilder("Store Game", BundleKind.game)
        .store_id("STORE123")
        .exec("game.exe")
        .version("1.2.3")
        .background(True)
        .prefer_xbox_mode(True)
        .requires_launcher("wombat")
        .provides_launcher("launcher.exe", ["Tag1", "Tag2"])
        .encrypted_image("payload.img")
        .build()
    )


@pytest.fixture
def homebrew_container() -> BundleContainer:
    return (
        BundleBuilder("Homebrew App", BundleKind.application)
        .homebrew_id("HB-1")
        .exec("app.sh")
        .version("0.9")
        .prefer_xbox_mode(True)
        .requires_launcher("wombat")
        .build()
    )


@pytest.fixture
def full_store_manifest() -> str:
    return FULL_STORE_MANIFEST


@pytest.fixture
def full_homebrew_manifest() -> str:
    return FULL_HOMEBREW_MANIFEST


@pytest.fixture
def encrypted_image_manifest() -> str:
    return ENCRYPTED_IMAGE_MANIFEST
