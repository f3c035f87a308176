"""
在构建根目录下定位 Xcode 工程包（`.xcodeproj`）。

宿主框架不同版本的目录约定不同，这里用按顺序尝试的策略列表表达：
第一个成功的策略决定结果，返回 `None` 表示当前构建不包含 iOS 平台。
"""

from __future__ import annotations

import os
from collections.abc import Callable

from .errors import AmbiguousProjectError, ProjectNotFoundError
from .log import log_step
from .types import ProjectLocation, StrategyResult

PROJECT_SUFFIX = ".xcodeproj"
PBXPROJ_NAME = "project.pbxproj"


def find_project_bundles(search_dir: str) -> list[str]:
    """列出目录下所有 `.xcodeproj` 目录（按名称排序）。"""
    out: list[str] = []
    for name in sorted(os.listdir(search_dir)):
        p = os.path.join(search_dir, name)
        if os.path.isdir(p) and name.endswith(PROJECT_SUFFIX):
            out.append(p)
    return out


def project_location_in(search_dir: str, *, strict: bool = False) -> ProjectLocation:
    """在单个目录中选出工程包；多个候选时取最后一个（严格模式下报错）。"""
    bundles = find_project_bundles(search_dir)
    if not bundles:
        raise ProjectNotFoundError(f"Could not find an {PROJECT_SUFFIX} folder in: {search_dir}")

    if len(bundles) > 1:
        found = ", ".join(os.path.basename(x) for x in bundles)
        if strict:
            raise AmbiguousProjectError(
                f"multiple {PROJECT_SUFFIX} found in {search_dir}: {found}"
            )
        log_step(f"Warning: multiple {PROJECT_SUFFIX} found in {search_dir}: {found}; "
                 f"using {os.path.basename(bundles[-1])}")

    project_dir = bundles[-1]
    name = os.path.basename(project_dir)[: -len(PROJECT_SUFFIX)]
    return ProjectLocation(
        search_dir=search_dir,
        project_dir=project_dir,
        project_name=name,
        pbxproj_path=os.path.join(project_dir, PBXPROJ_NAME),
        candidates=tuple(bundles),
    )


# 每个策略返回：
# - `success(ProjectLocation)`：找到工程；
# - `success(None)`：确认不是 iOS 构建，整体跳过；
# - `skip(reason)`：约定不适用，交给下一个策略。
LocateStrategy = Callable[[str, str, bool], StrategyResult]


def _platform_folder(project_root: str, platform: str, strict: bool) -> StrategyResult:
    folder = os.path.join(project_root, "platforms", platform)
    if not os.path.isdir(folder):
        return StrategyResult.skip(f"{folder} is not a directory")
    return StrategyResult.success(project_location_in(folder, strict=strict))


def _platform_missing(project_root: str, platform: str, strict: bool) -> StrategyResult:
    platforms = os.path.join(project_root, "platforms")
    folder = os.path.join(platforms, platform)
    if os.path.exists(folder) or os.path.isdir(platforms):
        # 框架目录结构存在但没有可用的 iOS 平台目录：非 iOS 构建。
        return StrategyResult.success(None)
    return StrategyResult.skip(f"{platforms} does not exist")


def _project_root(project_root: str, platform: str, strict: bool) -> StrategyResult:
    if not os.path.isdir(project_root):
        return StrategyResult.skip(f"{project_root} is not a directory")
    return StrategyResult.success(project_location_in(project_root, strict=strict))


LOCATE_STRATEGIES: tuple[LocateStrategy, ...] = (
    _platform_folder,
    _platform_missing,
    _project_root,
)


def locate_project(
    project_root: str,
    *,
    platform: str = "ios",
    strict: bool = False,
    strategies: tuple[LocateStrategy, ...] = LOCATE_STRATEGIES,
) -> ProjectLocation | None:
    """按策略顺序定位工程包；返回 `None` 表示无需处理。"""
    reasons: list[str] = []
    for strategy in strategies:
        result = strategy(project_root, platform, strict)
        if result.ok:
            return result.value
        reasons.append(result.reason)
    detail = "; ".join(reasons)
    raise ProjectNotFoundError(
        f"Could not find an {PROJECT_SUFFIX} folder in: {project_root} ({detail})"
    )
