"""
`xcode-prefs` 的命令行入口模块。

收集工程根目录与修改参数，并调用 `xcode_prefs.hook.enable_associated_domains`。
"""

import argparse
import os
from collections.abc import Sequence

from .errors import XcodePrefsError
from .hook import enable_associated_domains
from .log import log_step
from .patch import IOS_DEPLOYMENT_TARGET
from .types import PatchReport


def _print_report(report: PatchReport) -> None:
    """打印每个构建配置的处理结果。"""
    for config_id in report.updated:
        log_step(f"{config_id}: deployment target -> {report.threshold}")
    for config_id in report.satisfied:
        log_step(f"{config_id}: deployment target already >= {report.threshold}")
    for config_id in report.unparsable:
        log_step(f"{config_id}: deployment target not a version, unchanged")
    for config_id in report.entitlements:
        log_step(f"{config_id}: CODE_SIGN_ENTITLEMENTS updated")


def build_parser() -> argparse.ArgumentParser:
    """构建并返回 `xcode-prefs` 命令行参数解析器。"""
    p = argparse.ArgumentParser(
        prog="xcode-prefs",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "Patch the iOS Xcode project of a Cordova-style build:\n"
            "raise IPHONEOS_DEPLOYMENT_TARGET and optionally set CODE_SIGN_ENTITLEMENTS.\n"
            "Builds without an iOS platform are left untouched."
        ),
    )
    p.add_argument(
        "project_root",
        nargs="?",
        default="",
        help="Build root (default: current directory)",
    )
    p.add_argument("--platform", default="ios", help="Platform folder under platforms/ (default: ios)")
    p.add_argument(
        "-t",
        "--deployment-target",
        default=IOS_DEPLOYMENT_TARGET,
        help=f"Minimum IPHONEOS_DEPLOYMENT_TARGET (default: {IOS_DEPLOYMENT_TARGET})",
    )
    p.add_argument(
        "-e",
        "--entitlements",
        default="",
        help="Value for CODE_SIGN_ENTITLEMENTS, relative to the project (optional)",
    )
    p.add_argument(
        "--strict-project",
        action="store_true",
        help="Fail when more than one .xcodeproj is found instead of using the last one",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Patch in memory and print the result without writing project.pbxproj",
    )
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 入口：解析参数并执行工程修改。"""
    parser = build_parser()
    ns = parser.parse_args(argv)

    project_root = os.path.abspath(os.path.expanduser(ns.project_root or os.getcwd()))
    if not os.path.isdir(project_root):
        raise SystemExit(f"Error: project root not found: {project_root}")

    verbose = bool(ns.verbose or ns.dry_run)
    if verbose:
        log_step(f"Project root: {project_root}")

    try:
        report = enable_associated_domains(
            project_root,
            threshold=ns.deployment_target.strip(),
            entitlements_path=ns.entitlements or None,
            platform=ns.platform,
            strict=bool(ns.strict_project),
            dry_run=bool(ns.dry_run),
            verbose=verbose,
        )
    except (XcodePrefsError, ValueError) as e:
        raise SystemExit(f"Error: {e}") from e

    if report is not None and verbose:
        _print_report(report)
    return 0
