"""Asset selection."""

from .exceptions import NoAssetsError
from .schema import Asset
from .schema import Release

JAR_EXTENSION = ".jar"


def select_asset(assets: list[Asset]) -> Asset:
    """Pick the file to install from a release's assets.

    The first asset is the default. If any asset is a ``.jar`` the last
    ``.jar`` in the list wins instead.

    Raises:
        NoAssetsError: If there are no assets
    """
    if not assets:
        raise NoAssetsError("Release doesn't have any files attached")

    selected = assets[0]
    for asset in assets:
        if asset.name.endswith(JAR_EXTENSION):
            selected = asset
    return selected


def select_release_asset(release: Release) -> Asset:
    """Same as ``select_asset`` but names the release tag in the error."""
    try:
        return select_asset(release.assets)
    except NoAssetsError as e:
        raise NoAssetsError(
            f"Release {release.tag_name} doesn't have any files attached",
            context={"tag": release.tag_name},
        ) from e
