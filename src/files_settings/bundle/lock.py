"""Per settings-directory locking for bundle operations and store writes."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
import logging
import threading

from ..core.errors import BundleBusyError

logger = logging.getLogger(__name__)


class DirectoryLock:
    """Serializes access to one settings directory.

    Only one bundle operation may run at a time; a second one is rejected
    instead of queued. Ordinary store writes wait for a running bundle
    operation and are re-entrant, so a source import may save its store
    while the operation holds the lock.

    The lock is held in memory and only covers threads of this process.
    Another process using the same settings directory is not excluded.
    """

    _registry: dict[Path, "DirectoryLock"] = {}
    _registry_lock = threading.Lock()

    def __init__(self, directory: Path):
        self.directory = directory
        self._write_lock = threading.RLock()
        self._operation_guard = threading.Lock()
        self._operation: Optional[str] = None

    @classmethod
    def for_directory(cls, directory: Path) -> "DirectoryLock":
        """Get the process-wide lock for a settings directory."""
        key = Path(directory).resolve()
        with cls._registry_lock:
            lock = cls._registry.get(key)
            if lock is None:
                lock = cls(key)
                cls._registry[key] = lock
            return lock

    @property
    def active_operation(self) -> Optional[str]:
        """Name of the running bundle operation, if any."""
        return self._operation

    @contextmanager
    def operation(self, name: str) -> Iterator[None]:
        """Hold the directory for a whole bundle operation.

        Raises:
            BundleBusyError: If another bundle operation is running
        """
        if not self._operation_guard.acquire(blocking=False):
            raise BundleBusyError(
                f"Cannot start {name}: {self._operation} is already running on {self.directory}"
            )
        try:
            with self._write_lock:
                self._operation = name
                logger.debug(f"{name} acquired {self.directory}")
                try:
                    yield
                finally:
                    self._operation = None
                    logger.debug(f"{name} released {self.directory}")
        finally:
            self._operation_guard.release()

    @contextmanager
    def writing(self) -> Iterator[None]:
        """Hold the directory for a single store write."""
        with self._write_lock:
            yield
