"""
统一的流程输出。
"""


def log_step(message: str) -> None:
    """输出带 `[xcode-prefs]` 前缀的简洁提示。"""
    print(f"[xcode-prefs] {message}")
