"""Tests for asset selection."""

import pytest
from pack_github import Asset
from pack_github import NoAssetsError
from pack_github import Release
from pack_github import select_asset
from pack_github.assets import select_release_asset


def _assets(*names) -> list[Asset]:
    return [Asset(name=name, browser_download_url=f"https://example.com/{name}") for name in names]


def test_last_jar_wins():
    assert select_asset(_assets("a.zip", "b.jar", "c.jar")).name == "c.jar"


def test_jar_preferred_over_earlier_files():
    assert select_asset(_assets("sources.zip", "mod.jar", "README.md")).name == "mod.jar"


def test_defaults_to_first_asset():
    assert select_asset(_assets("a.zip")).name == "a.zip"
    assert select_asset(_assets("a.zip", "b.tar.gz")).name == "a.zip"


def test_extension_match_is_suffix_only():
    assert select_asset(_assets("a.zip", "b.jar.sha256")).name == "a.zip"


def test_empty_assets():
    with pytest.raises(NoAssetsError):
        select_asset([])


def test_release_without_assets_names_tag():
    with pytest.raises(NoAssetsError, match="v1.2"):
        select_release_asset(Release(tag_name="v1.2"))
