"""
工具内的异常类型。

库代码只抛出这些异常（以及参数非法时的 `ValueError`），由 CLI 统一转换为
`SystemExit`。
"""


class XcodePrefsError(RuntimeError):
    """所有工程修改失败的基类。"""


class ProjectNotFoundError(XcodePrefsError):
    """未找到 `.xcodeproj` 工程包，或所有加载策略都失败。"""


class AmbiguousProjectError(XcodePrefsError):
    """严格模式下同一目录存在多个 `.xcodeproj`。"""


class DescriptorIOError(XcodePrefsError):
    """`project.pbxproj` 读取、解析或写回失败。"""
