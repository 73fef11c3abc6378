"""Allow ``python -m gh_private_release``."""

from gh_private_release.main import main

main()
