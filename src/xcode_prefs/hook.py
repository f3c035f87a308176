"""
Build hook: enable the Associated Domains capability in the iOS project.

High-level flow:
1) Locate `platforms/ios/<Name>.xcodeproj` (or `<root>/<Name>.xcodeproj`).
   Builds without an iOS platform are a silent no-op.
2) Obtain a parsed project handle, trying in order:
   - the handle the build framework already parsed (`project=`)
   - parsing `<bundle>/project.pbxproj`
   - the first `*.xcodeproj/project.pbxproj` found by glob
3) Raise IPHONEOS_DEPLOYMENT_TARGET to the threshold and, when requested,
   point CODE_SIGN_ENTITLEMENTS at the given file.
4) Write the project file back (always, even when nothing changed) to the
   file it was loaded from.
"""

from __future__ import annotations

import glob
import os
from collections.abc import Callable
from typing import Protocol

from pbxproj import XcodeProject

from .codec import XcodeProjectCodec
from .errors import ProjectNotFoundError
from .locate import PBXPROJ_NAME, PROJECT_SUFFIX, locate_project
from .log import log_step
from .patch import IOS_DEPLOYMENT_TARGET, patch_project
from .types import PatchReport, ProjectLocation, StrategyResult
from .version import compare_versions


class ProjectCodec(Protocol):
    def load(self, path: str) -> XcodeProject: ...

    def dump(self, project: XcodeProject, path: str) -> None: ...


# 成功时 `value` 为 `(project, pbxproj_path)`。
LoadStrategy = Callable[[ProjectLocation, ProjectCodec, XcodeProject | None], StrategyResult]


def _from_context(
    location: ProjectLocation, codec: ProjectCodec, project: XcodeProject | None
) -> StrategyResult:
    if project is None:
        return StrategyResult.skip("no pre-parsed project supplied")
    return StrategyResult.success((project, location.pbxproj_path))


def _from_located_bundle(
    location: ProjectLocation, codec: ProjectCodec, project: XcodeProject | None
) -> StrategyResult:
    path = location.pbxproj_path
    if not os.path.isfile(path):
        return StrategyResult.skip(f"{path} does not exist")
    return StrategyResult.success((codec.load(path), path))


def _from_glob(
    location: ProjectLocation, codec: ProjectCodec, project: XcodeProject | None
) -> StrategyResult:
    pattern = os.path.join(glob.escape(location.search_dir), "*" + PROJECT_SUFFIX, PBXPROJ_NAME)
    matches = sorted(glob.glob(pattern))
    if not matches:
        return StrategyResult.skip(
            "does not appear to be an xcode project (no xcode project file)"
        )
    return StrategyResult.success((codec.load(matches[0]), matches[0]))


LOAD_STRATEGIES: tuple[LoadStrategy, ...] = (_from_context, _from_located_bundle, _from_glob)


def load_project(
    location: ProjectLocation,
    *,
    codec: ProjectCodec,
    project: XcodeProject | None = None,
    strategies: tuple[LoadStrategy, ...] = LOAD_STRATEGIES,
) -> tuple[XcodeProject, str]:
    """依次尝试加载策略，返回 `(工程对象, 写回路径)`；解析错误不会被吞掉。"""
    reasons: list[str] = []
    for strategy in strategies:
        result = strategy(location, codec, project)
        if result.ok:
            return result.value
        reasons.append(result.reason)
    raise ProjectNotFoundError(
        f"Could not load project file in: {location.project_dir} ({'; '.join(reasons)})"
    )


def enable_associated_domains(
    project_root: str,
    *,
    project: XcodeProject | None = None,
    threshold: str = IOS_DEPLOYMENT_TARGET,
    entitlements_path: str | None = None,
    platform: str = "ios",
    strict: bool = False,
    codec: ProjectCodec | None = None,
    compare: Callable[[str, str], int] = compare_versions,
    dry_run: bool = False,
    verbose: bool = False,
) -> PatchReport | None:
    """定位、修改并写回工程文件；非 iOS 构建返回 `None`。"""
    codec = codec or XcodeProjectCodec()

    location = locate_project(project_root, platform=platform, strict=strict)
    if location is None:
        if verbose:
            log_step(f"No {platform} platform under {project_root}, skipping")
        return None
    if verbose:
        log_step(f"Using project: {location.project_dir}")

    pbx, target = load_project(location, codec=codec, project=project)
    report = patch_project(
        pbx,
        threshold=threshold,
        entitlements_path=entitlements_path,
        compare=compare,
    )

    if dry_run:
        if verbose:
            log_step(f"Dry-run: not writing {target}")
        return report

    codec.dump(pbx, target)
    if verbose:
        log_step(f"Wrote {target}")
    return report
