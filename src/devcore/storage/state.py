import fcntl
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError

from devcore.errors import IOFailure, ParseFailure, WriteError
from devcore.models.project import Index
from devcore.storage.atomic import write_text_atomic

logger = logging.getLogger(__name__)


class IndexStore:
    def __init__(self, index_path: str | Path):
        self.path = Path(index_path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.index = Index()
        self._lock = threading.RLock()
        self._depth = 0

    def load(self) -> Index:
        """讀取索引檔並設為記憶體中的索引。"""
        self.index = self.read()
        return self.index

    def read(self) -> Index:
        """讀取索引檔但不替換記憶體中的索引；檔案不存在時回傳空索引。"""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No index at %s, starting empty", self.path)
            return Index()
        except UnicodeDecodeError as e:
            raise ParseFailure(f"Failed to parse the index file {self.path}: {e}") from e
        except OSError as e:
            raise IOFailure(f"Unable to read index file {self.path}: {e}") from e

        try:
            return Index.model_validate_json(text)
        except ValidationError as e:
            raise ParseFailure(f"Failed to parse the index file {self.path}: {e}") from e

    def persist(self, index: Index | None = None):
        """整份覆寫索引檔（原子替換）。"""
        index = index if index is not None else self.index
        try:
            write_text_atomic(self.path, index.to_json())
        except OSError as e:
            raise WriteError(f"Unable to write index file {self.path}: {e}") from e
        self.index = index
        logger.debug("Index persisted: %s", self.path)

    @contextmanager
    def locked(self) -> Iterator[None]:
        """行程內 (threading) 與跨行程 (flock) 的互斥，同一執行緒可重入。"""
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return
            try:
                self.lock_path.parent.mkdir(parents=True, exist_ok=True)
                fd = open(self.lock_path, "a")
            except OSError as e:
                raise IOFailure(f"Unable to open lock file {self.lock_path}: {e}") from e
            try:
                fcntl.flock(fd.fileno(), fcntl.LOCK_EX)
                self._depth = 1
                yield
            finally:
                self._depth = 0
                fcntl.flock(fd.fileno(), fcntl.LOCK_UN)
                fd.close()

    @contextmanager
    def transaction(self) -> Iterator[Index]:
        """在副本上修改索引，區塊正常結束才寫回並替換記憶體中的索引。"""
        with self.locked():
            working = self.index.model_copy(deep=True)
            yield working
            self.persist(working)
