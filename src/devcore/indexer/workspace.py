import logging
from dataclasses import dataclass, field
from pathlib import Path

from devcore.config import Settings
from devcore.indexer.reconciler import reconcile
from devcore.models.project import Index, now_minute
from devcore.models.sync import SyncReport
from devcore.storage.fs import Filesystem, LocalFilesystem
from devcore.storage.state import IndexStore
from devcore.utils.naming import current_user

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """所有操作共用的狀態：目錄配置、索引儲存與檔案系統。"""

    projects_root: Path
    templates_root: Path
    store: IndexStore
    fs: Filesystem = field(default_factory=LocalFilesystem)
    user: str = field(default_factory=current_user)

    @classmethod
    def from_settings(cls, settings: Settings, fs: Filesystem | None = None) -> "Workspace":
        ws = cls(
            projects_root=settings.projects_root(),
            templates_root=settings.templates_root(),
            store=IndexStore(settings.index_path()),
            fs=fs or LocalFilesystem(),
        )
        ws.ensure_roots()
        return ws

    @property
    def index(self) -> Index:
        return self.store.index

    def language_dir(self, lang: str) -> Path:
        return self.projects_root / lang

    def project_dir(self, lang: str, folder_name: str) -> Path:
        return self.projects_root / lang / folder_name

    def template_lang_dir(self, lang: str) -> Path:
        return self.templates_root / lang

    def template_dir(self, lang: str, name: str) -> Path:
        return self.templates_root / lang / name

    def ensure_roots(self):
        for root in (self.projects_root, self.templates_root):
            if not self.fs.exists(root):
                self.fs.make_dirs(root)

    def sync(self) -> SyncReport:
        """載入 → 對帳 → 寫回，整段持有鎖。"""
        with self.store.locked():
            index = self.store.read()
            reconciled, report = reconcile(
                index, self.projects_root, self.fs, user=self.user, now=now_minute()
            )
            self.store.persist(reconciled)
        logger.info(
            "Sync complete: %d language(s), %d project(s), %d change(s)",
            len(reconciled.languages), len(reconciled.projects), len(report.events),
        )
        return report
