import pytest

from cltodo.core.exceptions import StorageLocationError
from cltodo.core.location import (
    FilesystemStoreResolver,
    FixedStoreResolver,
    ensure_store,
    find_project_root,
)


@pytest.fixture()
def project(tmp_path):
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    (root / "src" / "pkg").mkdir(parents=True)
    return root


@pytest.fixture()
def home(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    return home


def test_find_project_root_walks_upward(project):
    assert find_project_root(project / "src" / "pkg", [".git"]) == project


def test_git_file_counts_as_marker(tmp_path):
    worktree = tmp_path / "worktree"
    worktree.mkdir()
    (worktree / ".git").write_text("gitdir: /elsewhere\n")
    assert find_project_root(worktree, [".git"]) == worktree


def test_project_store_under_vcs_root(settings, project, home):
    resolver = FilesystemStoreResolver(settings, home=home, cwd=project / "src" / "pkg")
    assert resolver.resolve(use_global=False) == project / ".cltodo" / "data.db"


def test_global_flag_wins_over_project(settings, project, home):
    resolver = FilesystemStoreResolver(settings, home=home, cwd=project)
    assert resolver.resolve(use_global=True) == home / ".cltodo" / "data.db"


def test_falls_back_to_home_without_project(settings, tmp_path, home):
    outside = tmp_path / "scratch"
    outside.mkdir()
    resolver = FilesystemStoreResolver(settings, home=home, cwd=outside)
    # marker name that cannot exist above tmp_path
    settings.VCS_MARKERS = [".cltodo-test-marker"]
    assert resolver.resolve(use_global=False) == home / ".cltodo" / "data.db"


def test_store_names_come_from_settings(settings, project, home):
    settings.STORE_DIR = ".tasks"
    settings.DB_FILENAME = "todo.sqlite3"
    resolver = FilesystemStoreResolver(settings, home=home, cwd=project)
    assert resolver.resolve(use_global=False) == project / ".tasks" / "todo.sqlite3"


def test_missing_home_directory(settings, tmp_path, monkeypatch):
    def no_home():
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr("cltodo.core.location.Path.home", no_home)
    resolver = FilesystemStoreResolver(settings, cwd=tmp_path)
    with pytest.raises(StorageLocationError):
        resolver.resolve(use_global=True)


def test_fixed_resolver_ignores_global_flag(tmp_path):
    resolver = FixedStoreResolver(tmp_path / "data.db")
    assert resolver.resolve(use_global=True) == resolver.resolve(use_global=False)


def test_ensure_store_creates_directories_and_file(tmp_path):
    path = tmp_path / "a" / "b" / "data.db"

    assert ensure_store(path) == path
    assert path.is_file()

    path.write_bytes(b"keep")
    ensure_store(path)
    assert path.read_bytes() == b"keep"


def test_ensure_store_fails_when_parent_is_a_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    with pytest.raises(StorageLocationError):
        ensure_store(blocker / ".cltodo" / "data.db")
