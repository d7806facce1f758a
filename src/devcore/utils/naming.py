import getpass
import os

from devcore.errors import InvalidNameError


def derive_folder_name(name: str) -> str:
    """GitHub 風格資料夾名：小寫、空白轉連字號、只保留英數字與連字號。"""
    lowered = name.lower().replace(" ", "-")
    return "".join(c for c in lowered if (c.isascii() and c.isalnum()) or c == "-")


def validate_component(value: str, what: str) -> str:
    """確認名稱是單一路徑元件，不能跳出根目錄。"""
    if not value or value in (".", "..") or "/" in value or os.sep in value or "\0" in value:
        raise InvalidNameError(f"Invalid {what} name: {value!r}")
    return value


def current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"
