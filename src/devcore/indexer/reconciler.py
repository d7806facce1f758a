"""對帳：讓索引與磁碟上的語言／專案目錄一致。"""

import logging
from datetime import datetime
from pathlib import Path

from devcore.errors import NotFoundError
from devcore.models.project import Index, Project
from devcore.models.sync import SyncEvent, SyncReport
from devcore.storage.fs import Prober

logger = logging.getLogger(__name__)


def reconcile(
    index: Index,
    projects_root: Path,
    prober: Prober,
    *,
    user: str,
    now: datetime,
) -> tuple[Index, SyncReport]:
    """回傳修正後的新索引與所有採納／移除的紀錄，不修改傳入的索引。"""
    if not prober.exists(projects_root):
        raise NotFoundError(f"Projects root does not exist: {projects_root}")

    report = SyncReport()

    # 1. 移除已不存在的語言
    languages: list[str] = []
    for lang in index.languages:
        lang_path = projects_root / lang
        if lang in languages:
            continue
        if lang and prober.exists(lang_path):
            languages.append(lang)
        else:
            _record(report, "dropped", "language", lang, lang_path,
                    detail="language directory has been moved or deleted")

    # 2. 採納磁碟上未追蹤的語言
    for lang in sorted(prober.list_subdirs(projects_root) - set(languages)):
        languages.append(lang)
        _record(report, "adopted", "language", lang, projects_root / lang)

    # 3. 移除已不存在的專案；以 (語言, 資料夾名) 為識別
    projects: list[Project] = []
    seen: set[tuple[str, str]] = set()
    for project in index.projects:
        path = projects_root / project.lang / project.folder_name
        if project.key in seen:
            _record(report, "dropped", "project", project.lang, path,
                    folder_name=project.folder_name, detail="duplicate index entry")
            continue
        if project.lang and project.folder_name and prober.exists(path):
            projects.append(project.model_copy())
            seen.add(project.key)
        else:
            _record(report, "dropped", "project", project.lang, path,
                    folder_name=project.folder_name,
                    detail="project directory has been moved or deleted")
    users = {p.created_by for p in projects}

    # 4. 以磁碟為準更新大小與 git 狀態
    for project in projects:
        path = projects_root / project.lang / project.folder_name
        try:
            project.size, project.git = _metrics(prober, path)
        except OSError as e:
            _record(report, "metrics_failed", "project", project.lang, path,
                    folder_name=project.folder_name, detail=str(e))

    # 5. 採納每個語言目錄下未追蹤的專案
    for lang in languages:
        lang_path = projects_root / lang
        for folder_name in sorted(prober.list_subdirs(lang_path)):
            if (lang, folder_name) in seen:
                continue
            path = lang_path / folder_name
            size, git = 0, False
            try:
                size, git = _metrics(prober, path)
            except OSError as e:
                _record(report, "metrics_failed", "project", lang, path,
                        folder_name=folder_name, detail=str(e))
            projects.append(Project(
                name=folder_name,
                folder_name=folder_name,
                lang=lang,
                created_by=user,
                created_at=now,
                size=size,
                git=git,
            ))
            seen.add((lang, folder_name))
            users.add(user)
            _record(report, "adopted", "project", lang, path, folder_name=folder_name)

    # 6. 合併舊有的使用者清單
    users.update(index.users)
    users.discard("")

    result = Index(projects=projects, languages=languages, users=sorted(users))
    return result, report


def _metrics(prober: Prober, path: Path) -> tuple[int, bool]:
    return prober.dir_size(path), prober.uses_git(path)


def _record(
    report: SyncReport,
    action: str,
    kind: str,
    language: str,
    path: Path,
    folder_name: str | None = None,
    detail: str | None = None,
):
    event = SyncEvent(
        action=action,
        kind=kind,
        language=language,
        folder_name=folder_name,
        path=str(path),
        detail=detail,
    )
    report.events.append(event)
    if action == "metrics_failed":
        logger.warning("Could not measure %s: %s", path, detail)
    elif action == "adopted":
        logger.info("Added %s from filesystem to index: %s", kind, path)
    else:
        logger.info("Dropped %s from index: %s (%s)", kind, path, detail)
