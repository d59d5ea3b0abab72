"""
Decide which database file backs an invocation.

Resolution is a pure function of (home directory, working directory, VCS
markers). Creating the directory and the file is a separate step so tests
can resolve without touching the real home directory.
"""

from pathlib import Path
from typing import Protocol

from cltodo.core.config import Settings, get_settings
from cltodo.core.exceptions import StorageLocationError
from cltodo.utils.logger import get_logger

logger = get_logger(__name__)


class StoreResolver(Protocol):
    def resolve(self, use_global: bool) -> Path: ...


def find_project_root(start: Path, markers: list[str]) -> Path | None:
    # walk upward from start, the first directory holding a marker wins
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in markers):
            return candidate
    return None


class FilesystemStoreResolver:
    """
    Resolve `<vcs-root>/.cltodo/data.db`, falling back to `~/.cltodo/data.db`.

    `home` and `cwd` default to the real environment and are looked up lazily,
    so a resolver for a project store never needs a home directory.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        home: Path | None = None,
        cwd: Path | None = None,
    ):
        self.settings = settings or get_settings()
        self._home = home
        self._cwd = cwd

    @property
    def home(self) -> Path:
        if self._home is not None:
            return self._home
        try:
            return Path.home()
        except RuntimeError as exc:
            raise StorageLocationError(f"cannot determine home directory: {exc}") from exc

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    def global_path(self) -> Path:
        return self.home / self.settings.STORE_DIR / self.settings.DB_FILENAME

    def resolve(self, use_global: bool) -> Path:
        if use_global:
            return self.global_path()

        root = find_project_root(self.cwd.resolve(), self.settings.VCS_MARKERS)
        if root is None:
            logger.debug("No project root found from %s, using global store", self.cwd)
            return self.global_path()

        return root / self.settings.STORE_DIR / self.settings.DB_FILENAME


class FixedStoreResolver:
    """Always resolve to the same file, whatever the global flag says."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def resolve(self, use_global: bool) -> Path:
        return self.path


def ensure_store(path: Path) -> Path:
    # create the directory tree and an empty database file if missing
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            path.touch()
            logger.info("Created database file at %s", path)
    except OSError as exc:
        raise StorageLocationError(f"cannot create store at {path}: {exc}") from exc
    return path
