from pydantic import BaseModel


class CreateLanguageRequest(BaseModel):
    name: str


class CreateProjectRequest(BaseModel):
    language: str
    name: str
    folder_name: str | None = None  # 未指定時由 name 推導
    init_git: bool = False
    template: str | None = None
    create_language: bool = False


class AddTemplateRequest(BaseModel):
    language: str
    name: str
    source: str
    create_language: bool = False


class TemplateInfo(BaseModel):
    language: str
    name: str
    path: str
