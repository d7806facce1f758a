from pydantic import BaseModel

from devcore.models.project import Project


class SyncEvent(BaseModel):
    action: str  # dropped, adopted, metrics_failed
    kind: str  # language, project
    language: str
    folder_name: str | None = None
    path: str
    detail: str | None = None


class SyncReport(BaseModel):
    events: list[SyncEvent] = []

    def of(self, action: str, kind: str | None = None) -> list[SyncEvent]:
        return [
            e for e in self.events
            if e.action == action and (kind is None or e.kind == kind)
        ]


class OperationResult(BaseModel):
    status: str  # created, unchanged, deleted, aborted
    message: str
    path: str | None = None
    warnings: list[str] = []
    project: Project | None = None
