"""GitHub release asset model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class ReleaseAsset:
    """Represents an asset attached to a GitHub release.

    Attributes:
        id: Platform-assigned numeric asset id
        name: Asset filename
        size: Asset size in bytes (0 when unknown)
        content_type: Declared MIME type (may be empty)

    """

    id: int
    name: str
    size: int = 0
    content_type: str = ""

    @classmethod
    def from_api_response(cls, asset_data: Any) -> ReleaseAsset | None:
        """Create ReleaseAsset from GitHub API response data.

        Args:
            asset_data: Raw asset object from the releases API

        Returns:
            ReleaseAsset instance or None if required fields are missing

        """
        if not isinstance(asset_data, dict):
            return None

        name = asset_data.get("name")
        asset_id = asset_data.get("id")
        # bool is an int subclass; reject it explicitly
        if (
            not isinstance(name, str)
            or not name
            or not isinstance(asset_id, int)
            or isinstance(asset_id, bool)
        ):
            return None

        try:
            size = int(asset_data.get("size") or 0)
        except (TypeError, ValueError):
            size = 0

        return cls(
            id=asset_id,
            name=name,
            size=size,
            content_type=str(asset_data.get("content_type") or ""),
        )


def find_asset(assets: Any, filename: str) -> ReleaseAsset | None:
    """Return the first asset whose name equals ``filename`` exactly.

    Args:
        assets: The ``assets`` array of a release response
        filename: Asset filename to match (case-sensitive)

    Returns:
        The matching asset, or None if no asset matches

    """
    for asset_data in assets:
        asset = ReleaseAsset.from_api_response(asset_data)
        if asset is not None and asset.name == filename:
            return asset
    return None
