# file-backed counter state
import json
import logging
import os
import threading
from typing import Any, Optional

from .errors import PersistenceCorruption, PersistenceWriteFailure
from .models import Counter, normalize

logger = logging.getLogger(__name__)


class CounterStore:
    """
    JSON file holding the vote Counter. The file is the only source of
    truth: every load() goes back to disk, every save() replaces the file
    via write-to-temp + os.replace so readers never see a partial write.

    `lock` is the single-writer point for load -> mutate -> save.
    The store itself never takes it; callers that mutate should.
    """

    def __init__(self, path: str, tmp_path: Optional[str] = None):
        self.path = os.fspath(path)
        self.tmp_path = os.fspath(tmp_path) if tmp_path else self.path + ".tmp"
        self.lock = threading.Lock()

    def _read_raw(self) -> Any:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except (FileNotFoundError, NotADirectoryError):
            raise
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceCorruption(f"cannot read {self.path}: {exc}") from exc

        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise PersistenceCorruption(f"cannot parse {self.path}: {exc}") from exc

    def load(self) -> Counter:
        """
        Never raises: missing or corrupt files read as zero votes.
        """
        try:
            raw = self._read_raw()
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("No votes file at %s, starting from zero", self.path)
            return Counter()
        except PersistenceCorruption as exc:
            logger.warning("Votes file unreadable, treating as zero: %s", exc)
            return Counter()

        counter = normalize(raw)
        if raw != counter.model_dump():
            logger.debug("Normalized stored votes %r -> %r", raw, counter.model_dump())
        return counter

    def save(self, counter: Counter) -> None:
        payload = json.dumps(normalize(counter.model_dump()).model_dump(), indent=2)
        try:
            with open(self.tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(self.tmp_path, self.path)
        except OSError as exc:
            try:
                os.remove(self.tmp_path)
            except OSError:
                pass
            raise PersistenceWriteFailure(f"cannot write {self.path}: {exc}") from exc

    def ensure_initialized(self) -> Counter:
        """
        Make sure the file exists and holds normalized content.
        """
        parent = os.path.dirname(self.path)
        if parent:
            try:
                os.makedirs(parent, exist_ok=True)
            except OSError as exc:
                raise PersistenceWriteFailure(f"cannot create {parent}: {exc}") from exc
        with self.lock:
            counter = self.load()
            self.save(counter)
        return counter
