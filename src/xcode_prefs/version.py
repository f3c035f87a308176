"""
点分数字版本号的解析与比较。

每段按整数比较而非字符串比较，因此 `8.10 > 8.2`；缺失的段视为 0。
"""

from __future__ import annotations


def parse_version(value: str) -> tuple[int, ...]:
    """将 `8.0` / `"9.3.1"` 解析为整数元组，非法时抛出 `ValueError`。"""
    s = value.strip()
    if len(s) >= 2 and s[0] == '"' and s[-1] == '"':
        s = s[1:-1].strip()
    if not s:
        raise ValueError("empty version")
    parts = s.split(".")
    out: list[int] = []
    for p in parts:
        if not p.isdigit():
            raise ValueError(f"invalid version: {value}")
        out.append(int(p))
    return tuple(out)


def is_version(value: str) -> bool:
    try:
        parse_version(value)
    except ValueError:
        return False
    return True


def compare_versions(a: str, b: str) -> int:
    """比较两个版本号：`a < b` 返回 -1，相等返回 0，`a > b` 返回 1。"""
    va = parse_version(a)
    vb = parse_version(b)
    width = max(len(va), len(vb))
    va = va + (0,) * (width - len(va))
    vb = vb + (0,) * (width - len(vb))
    if va < vb:
        return -1
    if va > vb:
        return 1
    return 0
