from pathlib import Path

from pydantic_settings import BaseSettings

from devcore.errors import ConfigError

CONFIG_DIR = Path.home() / ".config" / "devcore"


class Settings(BaseSettings):
    # 相對路徑一律以使用者家目錄為基準
    projects_path: str | None = None
    templates_path: str = str(CONFIG_DIR / "templates")
    devmap_path: str = str(CONFIG_DIR / "devmap.json")

    def get(self, key: str) -> str:
        """以字串鍵查詢設定值，未知或未設定的鍵視為錯誤。"""
        if key not in type(self).model_fields:
            raise ConfigError(f"Invalid configuration key '{key}'")
        value = getattr(self, key)
        if not value:
            raise ConfigError(
                f"Required key '{key}' is not set. Add '{key} = <{key}>' to "
                f"{CONFIG_DIR / 'devcore.conf'} or export it as an environment variable"
            )
        return value

    def projects_root(self) -> Path:
        return _resolve(self.get("projects_path"))

    def templates_root(self) -> Path:
        return _resolve(self.get("templates_path"))

    def index_path(self) -> Path:
        return _resolve(self.get("devmap_path"))

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": str(CONFIG_DIR / "devcore.conf"),
        "extra": "ignore",
    }


def _resolve(raw: str) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path.home() / path
    return path


settings = Settings()
