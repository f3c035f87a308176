"""
对 `XCBuildConfiguration` 分区的构建设置做幂等修改。

- 部署目标低于阈值或缺失时提升到阈值，从不降低。
- 可选地为所有构建配置写入 `CODE_SIGN_ENTITLEMENTS`。
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from pbxproj import PBXGenericObject, XcodeProject

from .log import log_step
from .types import PatchReport
from .version import compare_versions, is_version, parse_version

IOS_DEPLOYMENT_TARGET = "8.0"
DEPLOYMENT_TARGET_KEY = "IPHONEOS_DEPLOYMENT_TARGET"
ENTITLEMENTS_KEY = "CODE_SIGN_ENTITLEMENTS"
BUILD_CONFIGURATION_ISA = "XCBuildConfiguration"
COMMENT_KEY = re.compile(r"_comment$")


def non_comments(section: dict[str, Any]) -> dict[str, Any]:
    """过滤掉以 `_comment` 结尾的注释伪键。"""
    return {k: v for k, v in section.items() if not COMMENT_KEY.search(k)}


def build_configurations(project: XcodeProject) -> dict[str, Any]:
    """返回 `id -> XCBuildConfiguration`，已去除注释伪键。"""
    section = {
        str(config.get_id()): config
        for config in project.objects.get_objects_in_section(BUILD_CONFIGURATION_ISA)
    }
    return non_comments(section)


def _build_settings(config: Any) -> Any:
    if "buildSettings" not in config:
        config["buildSettings"] = PBXGenericObject()
    return config["buildSettings"]


def _setting(settings: Any, key: str) -> Any:
    return settings[key] if key in settings else None


def update_deployment_target(
    project: XcodeProject,
    *,
    threshold: str = IOS_DEPLOYMENT_TARGET,
    compare: Callable[[str, str], int] = compare_versions,
    report: PatchReport | None = None,
) -> PatchReport:
    """将每个构建配置的 `IPHONEOS_DEPLOYMENT_TARGET` 提升到至少 `threshold`。"""
    parse_version(threshold)
    if report is None:
        report = PatchReport(threshold=threshold)

    for config_id, config in build_configurations(project).items():
        settings = _build_settings(config)
        current = _setting(settings, DEPLOYMENT_TARGET_KEY)
        if current is None or current == "":
            settings[DEPLOYMENT_TARGET_KEY] = threshold
            report.updated.append(config_id)
            continue

        raw = str(current)
        if not is_version(raw):
            # 例如 `$(RECOMMENDED_IPHONEOS_DEPLOYMENT_TARGET)`，无法比较时保持不变。
            report.unparsable.append(config_id)
            log_step(f"Warning: {config_id}: cannot compare {DEPLOYMENT_TARGET_KEY} = {raw}, left unchanged")
            continue

        if compare(raw, threshold) < 0:
            settings[DEPLOYMENT_TARGET_KEY] = threshold
            report.updated.append(config_id)
        else:
            report.satisfied.append(config_id)

    return report


def set_code_sign_entitlements(project: XcodeProject, entitlements_path: str) -> list[str]:
    """为所有构建配置设置签名权限文件路径，返回实际改动的配置 id。"""
    if not entitlements_path:
        raise ValueError("empty entitlements path")
    changed: list[str] = []
    for config_id, config in build_configurations(project).items():
        settings = _build_settings(config)
        if _setting(settings, ENTITLEMENTS_KEY) == entitlements_path:
            continue
        settings[ENTITLEMENTS_KEY] = entitlements_path
        changed.append(config_id)
    return changed


def patch_project(
    project: XcodeProject,
    *,
    threshold: str = IOS_DEPLOYMENT_TARGET,
    entitlements_path: str | None = None,
    compare: Callable[[str, str], int] = compare_versions,
) -> PatchReport:
    """执行全部修改；部署目标有更新时输出一行提示。"""
    report = update_deployment_target(project, threshold=threshold, compare=compare)
    if entitlements_path:
        report.entitlements = set_code_sign_entitlements(project, entitlements_path)

    if report.deployment_target_updated:
        print(f"IOS project now has deployment target set as: {threshold}")
    return report
