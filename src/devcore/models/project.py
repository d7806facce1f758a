from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

TIME_FORMAT = "%H:%M %d-%m-%Y"


def now_minute() -> datetime:
    """目前時間，截到分鐘（與儲存格式的精度一致）。"""
    return datetime.now().replace(second=0, microsecond=0)


class Project(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    folder_name: str = Field(default="", alias="folderName")
    lang: str = ""
    created_by: str = ""
    created_at: datetime = Field(default_factory=now_minute)
    size: int = 0
    git: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.lang, self.folder_name)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        if isinstance(value, datetime):
            return value
        try:
            return datetime.strptime(str(value), TIME_FORMAT)
        except ValueError:
            # 無法解析的時間戳記退回現在時間，不讓整份索引載入失敗
            return now_minute()

    @field_serializer("created_at")
    def _format_created_at(self, value: datetime) -> str:
        return value.strftime(TIME_FORMAT)


class Index(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    projects: list[Project] = Field(default_factory=list, alias="Projects")
    languages: list[str] = Field(default_factory=list, alias="Languages")
    users: list[str] = Field(default_factory=list, alias="Users")

    def has_language(self, name: str) -> bool:
        return name in self.languages

    def find_project(self, lang: str, folder_name: str) -> Project | None:
        for project in self.projects:
            if project.key == (lang, folder_name):
                return project
        return None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=4)
