from collections.abc import Callable
from pathlib import Path

Confirm = Callable[[str], bool]


def double_confirm(confirm: Confirm, what: str, path: Path) -> bool:
    """刪除前需要兩次獨立的確認。"""
    if not confirm(f"Are you absolutely sure you want to delete {what} located at '{path}'?"):
        return False
    return confirm(f"Please confirm again: delete {what} from '{path}'?")


def answers(*replies: bool) -> Confirm:
    """依序回傳預先給定答案的 confirm（API 以查詢參數帶入兩次確認）。"""
    pending = list(replies)

    def _confirm(prompt: str) -> bool:
        return pending.pop(0) if pending else False

    return _confirm
