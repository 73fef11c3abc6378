"""Domain types for release asset fetching.

Pure value objects without IO or infrastructure dependencies.
"""

from gh_private_release.domain.asset import ReleaseAsset
from gh_private_release.domain.result import FetchResult, FetchState
from gh_private_release.domain.target import DownloadTarget, ReleaseLocation

__all__ = [
    "DownloadTarget",
    "FetchResult",
    "FetchState",
    "ReleaseAsset",
    "ReleaseLocation",
]
