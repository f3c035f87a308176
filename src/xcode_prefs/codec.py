"""
`project.pbxproj` 的读写，基于 `pbxproj`（mod-pbxproj）库。

库本身抛出的各种解析/写入异常统一包装为 `DescriptorIOError`，保留原始异常链。
"""

from __future__ import annotations

from pbxproj import XcodeProject

from .errors import DescriptorIOError


class XcodeProjectCodec:
    """默认的读写实现，可替换为任何提供 `load` / `dump` 的对象。"""

    def load(self, path: str) -> XcodeProject:
        try:
            return XcodeProject.load(path)
        except Exception as e:
            raise DescriptorIOError(f"failed to read project file {path}: {e}") from e

    def dump(self, project: XcodeProject, path: str) -> None:
        try:
            project.save(path)
        except Exception as e:
            raise DescriptorIOError(f"failed to write project file {path}: {e}") from e
