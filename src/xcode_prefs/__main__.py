"""
`python -m xcode_prefs` entrypoint.

The installed console script `xcode-prefs` calls the same `xcode_prefs.cli:main`.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
