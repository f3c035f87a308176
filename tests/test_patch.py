from pathlib import Path

import pytest
from pbxproj import XcodeProject

from xcode_prefs.patch import (
    build_configurations,
    non_comments,
    patch_project,
    set_code_sign_entitlements,
    update_deployment_target,
)

FIXTURE = Path(__file__).parent / "fixtures" / "HelloCordova.pbxproj"

NATIVE_DEBUG = "1D6058940D05DD3E006BF1C4"
NATIVE_RELEASE = "1D6058950D05DD3E006BF1C4"
PROJECT_DEBUG = "C01FCF4F08A954540054247B"
PROJECT_RELEASE = "C01FCF5008A954540054247B"


def _target_line(value: str | None) -> str:
    return "" if value is None else f"\t\t\t\tIPHONEOS_DEPLOYMENT_TARGET = {value};\n"


def _project(tmp_path: Path, *, debug: str | None = "7.0", release: str | None = "9.0") -> XcodeProject:
    """加载样例工程，并替换工程级 Debug/Release 的部署目标。"""
    text = FIXTURE.read_text(encoding="utf-8")
    text = text.replace(_target_line("7.0"), _target_line(debug))
    text = text.replace(_target_line("9.0"), _target_line(release))
    path = tmp_path / "project.pbxproj"
    path.write_text(text, encoding="utf-8")
    return XcodeProject.load(str(path))


def _settings(proj: XcodeProject, config_id: str):
    return proj.objects[config_id]["buildSettings"]


def _target(proj: XcodeProject, config_id: str) -> str | None:
    settings = _settings(proj, config_id)
    return settings["IPHONEOS_DEPLOYMENT_TARGET"] if "IPHONEOS_DEPLOYMENT_TARGET" in settings else None


def test_non_comments_uses_exact_suffix() -> None:
    section = {"A": 1, "A_comment": "Debug", "B_commentary": 2, "C_COMMENT": 3}
    assert non_comments(section) == {"A": 1, "B_commentary": 2, "C_COMMENT": 3}


def test_build_configurations_lists_every_record(tmp_path) -> None:
    proj = _project(tmp_path)

    assert sorted(build_configurations(proj)) == sorted(
        [NATIVE_DEBUG, NATIVE_RELEASE, PROJECT_DEBUG, PROJECT_RELEASE]
    )


def test_missing_target_is_set_to_threshold(tmp_path) -> None:
    proj = _project(tmp_path, debug=None, release=None)

    report = update_deployment_target(proj, threshold="8.0")

    for config_id in (NATIVE_DEBUG, NATIVE_RELEASE, PROJECT_DEBUG, PROJECT_RELEASE):
        assert _target(proj, config_id) == "8.0"
    assert len(report.updated) == 4


def test_lower_target_is_raised_to_exactly_threshold(tmp_path) -> None:
    proj = _project(tmp_path, debug="7.1", release="8.3")

    update_deployment_target(proj, threshold="9.0")

    assert _target(proj, PROJECT_DEBUG) == "9.0"
    assert _target(proj, PROJECT_RELEASE) == "9.0"


def test_higher_or_equal_target_is_untouched(tmp_path) -> None:
    proj = _project(tmp_path, debug="8.0", release="10.3")

    report = update_deployment_target(proj, threshold="8.0")

    assert sorted(report.satisfied) == [PROJECT_DEBUG, PROJECT_RELEASE]
    assert _target(proj, PROJECT_DEBUG) == "8.0"
    assert _target(proj, PROJECT_RELEASE) == "10.3"


def test_comparison_is_numeric_not_lexical(tmp_path) -> None:
    proj = _project(tmp_path, debug="8.10", release="8.1")

    report = update_deployment_target(proj, threshold="8.2")

    assert _target(proj, PROJECT_DEBUG) == "8.10"
    assert _target(proj, PROJECT_RELEASE) == "8.2"
    assert PROJECT_DEBUG in report.satisfied
    assert PROJECT_RELEASE in report.updated


def test_non_version_target_is_left_unchanged(tmp_path, capsys) -> None:
    proj = _project(tmp_path, debug='"$(RECOMMENDED_IPHONEOS_DEPLOYMENT_TARGET)"')

    report = update_deployment_target(proj, threshold="8.0")

    assert report.unparsable == [PROJECT_DEBUG]
    assert _target(proj, PROJECT_DEBUG) == "$(RECOMMENDED_IPHONEOS_DEPLOYMENT_TARGET)"
    assert "Warning" in capsys.readouterr().out


def test_comparator_only_sees_real_setting_values(tmp_path) -> None:
    proj = _project(tmp_path)
    calls: list[tuple[str, str]] = []

    def compare(a: str, b: str) -> int:
        calls.append((a, b))
        return -1 if a < b else 1

    update_deployment_target(proj, threshold="8.0", compare=compare)

    assert sorted(calls) == [("7.0", "8.0"), ("9.0", "8.0")]


def test_invalid_threshold_raises(tmp_path) -> None:
    with pytest.raises(ValueError):
        update_deployment_target(_project(tmp_path), threshold="nine")


def test_patch_project_prints_notice_once_and_is_idempotent(tmp_path, capsys) -> None:
    proj = _project(tmp_path)

    first = patch_project(proj, threshold="8.0")
    assert capsys.readouterr().out == "IOS project now has deployment target set as: 8.0\n"
    assert sorted(first.updated) == [NATIVE_DEBUG, NATIVE_RELEASE, PROJECT_DEBUG]

    second = patch_project(proj, threshold="8.0")
    assert capsys.readouterr().out == ""
    assert second.updated == []
    assert len(second.satisfied) == 4


def test_set_code_sign_entitlements(tmp_path) -> None:
    proj = _project(tmp_path)

    changed = set_code_sign_entitlements(proj, "My App/Resources/app.entitlements")

    assert len(changed) == 4
    assert _settings(proj, NATIVE_DEBUG)["CODE_SIGN_ENTITLEMENTS"] == "My App/Resources/app.entitlements"
    assert set_code_sign_entitlements(proj, "My App/Resources/app.entitlements") == []


def test_patch_project_with_entitlements_reports_them(tmp_path) -> None:
    proj = _project(tmp_path, debug="9.0")

    report = patch_project(proj, threshold="8.0", entitlements_path="App/App.entitlements")

    assert len(report.entitlements) == 4
    assert PROJECT_DEBUG in report.satisfied
