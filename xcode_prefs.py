#!/usr/bin/env python3
"""
Source-checkout entrypoint.

Allows running the tool without installing it:
  python3 xcode_prefs.py path/to/cordova/app
"""

import os
import sys

# 未安装时将 `src/` 加入 sys.path，以便直接在源码目录运行。
_HERE = os.path.dirname(os.path.abspath(__file__))
_SRC = os.path.join(_HERE, "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

# 作为 `xcode_prefs` 被导入时表现为包，避免遮蔽 `src/xcode_prefs/`。
__path__ = [os.path.join(_SRC, "xcode_prefs")]


def main(argv: list[str] | None = None) -> int:
    from xcode_prefs.cli import main as _main

    return _main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
