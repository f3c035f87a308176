"""
各模块共享的轻量类型定义。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ProjectLocation:
    """定位到的 Xcode 工程包。"""

    # 实际被扫描的目录（`platforms/ios/` 或项目根目录）。
    search_dir: str
    project_dir: str
    project_name: str
    pbxproj_path: str
    candidates: tuple[str, ...] = ()


@dataclass(frozen=True)
class StrategyResult:
    """回退策略的单次尝试结果；`ok=False` 时 `reason` 说明跳过原因。"""

    ok: bool
    value: Any = None
    reason: str = ""

    @classmethod
    def success(cls, value: Any) -> StrategyResult:
        return cls(ok=True, value=value)

    @classmethod
    def skip(cls, reason: str) -> StrategyResult:
        return cls(ok=False, reason=reason)


@dataclass
class PatchReport:
    """一次修改所涉及的构建配置 id。"""

    threshold: str
    updated: list[str] = field(default_factory=list)
    satisfied: list[str] = field(default_factory=list)
    # 值不是纯数字版本号（例如 `$(RECOMMENDED_IPHONEOS_DEPLOYMENT_TARGET)`），保持原样。
    unparsable: list[str] = field(default_factory=list)
    entitlements: list[str] = field(default_factory=list)

    @property
    def deployment_target_updated(self) -> bool:
        return bool(self.updated)
