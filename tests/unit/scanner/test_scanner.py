"""Unit tests for DirectoryScanner project discovery."""

import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from fclean.core.notifier import RecordingNotifier
from fclean.scanner.scanner import (
    DirectoryScanner,
    RootNotADirectoryError,
    RootNotFoundError,
    RootPathError,
    RootUnreadableError,
    ScanError,
    check_root,
)
from fclean.scanner.validator import ProjectValidator


def _paths(scanner: DirectoryScanner, root: Path) -> list[Path]:
    """Return discovered project paths."""
    return [p.path for p in scanner.discover(root)]


class TestDiscover:
    """Tests for discovering projects in a tree."""

    def test_finds_all_projects(self, projects_root: Path) -> None:
        """Every project in the tree is discovered, nested ones included."""
        found = _paths(DirectoryScanner(), projects_root)

        assert set(found) == {
            projects_root / "alpha",
            projects_root / "alpha" / "example",
            projects_root / "beta",
        }

    def test_depth_first_name_order(self, projects_root: Path) -> None:
        """Projects are returned depth-first in name order."""
        found = _paths(DirectoryScanner(), projects_root)

        assert found == [
            projects_root / "alpha",
            projects_root / "alpha" / "example",
            projects_root / "beta",
        ]

    def test_root_itself_is_a_project(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """The root directory is validated like any other directory."""
        root = make_project(tmp_path / "app")
        assert _paths(DirectoryScanner(), root) == [root]

    def test_nested_pubspec_and_lib(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """proj/ and proj/sub/ are both counted."""
        make_project(tmp_path / "proj")
        make_project(tmp_path / "proj" / "sub")

        found = _paths(DirectoryScanner(), tmp_path)

        assert found == [tmp_path / "proj", tmp_path / "proj" / "sub"]

    def test_project_inside_lib_found(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """Descent continues into a project's own lib/ directory."""
        make_project(tmp_path / "outer")
        make_project(tmp_path / "outer" / "lib" / "inner")

        found = _paths(DirectoryScanner(), tmp_path)

        assert tmp_path / "outer" / "lib" / "inner" in found

    def test_empty_tree(self, tmp_path: Path) -> None:
        """A tree without projects yields an empty list."""
        (tmp_path / "a" / "b").mkdir(parents=True)
        assert DirectoryScanner().discover(tmp_path) == []

    def test_ignores_incomplete_projects(self, tmp_path: Path) -> None:
        """Directories with only one half of the signature are skipped."""
        (tmp_path / "only_pubspec").mkdir()
        (tmp_path / "only_pubspec" / "pubspec.yaml").write_text("")
        (tmp_path / "only_lib" / "lib").mkdir(parents=True)

        assert DirectoryScanner().discover(tmp_path) == []

    def test_very_deep_nesting(self, tmp_path: Path, make_project: Callable[[Path], Path]) -> None:
        """Deep trees are walked without hitting recursion limits."""
        deep = tmp_path
        for i in range(60):
            deep = deep / f"level{i}"
        make_project(deep)

        assert _paths(DirectoryScanner(), tmp_path) == [deep]

    def test_special_characters_in_names(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """Project directories with spaces and unicode are found."""
        project = make_project(tmp_path / "my app (copy) é")
        assert _paths(DirectoryScanner(), tmp_path) == [project]

    def test_idempotent(self, projects_root: Path) -> None:
        """Two scans of an unchanged tree return the same projects."""
        scanner = DirectoryScanner()
        assert scanner.discover(projects_root) == scanner.discover(projects_root)

    def test_accepts_string_root(self, projects_root: Path) -> None:
        """The root may be passed as a string."""
        assert len(DirectoryScanner().discover(str(projects_root))) == 3

    def test_relative_root_gives_absolute_paths(
        self,
        tmp_path: Path,
        make_project: Callable[[Path], Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Discovered paths are absolute even for a relative root."""
        make_project(tmp_path / "app")
        monkeypatch.chdir(tmp_path)

        found = _paths(DirectoryScanner(), Path("."))

        assert len(found) == 1
        assert found[0].is_absolute()
        assert found[0].name == "app"

    def test_custom_validator(self, tmp_path: Path) -> None:
        """The scanner uses the injected validator."""
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / "package.json").write_text("{}")
        (tmp_path / "web" / "src").mkdir()
        validator = ProjectValidator(manifest_name="package.json", source_dir_name="src")

        assert _paths(DirectoryScanner(validator=validator), tmp_path) == [tmp_path / "web"]


class TestSymlinks:
    """Tests for symbolic link handling."""

    def test_symlinked_project_only(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """A root containing only a symlinked copy of a project yields nothing."""
        real = make_project(tmp_path / "elsewhere" / "app")
        root = tmp_path / "root"
        root.mkdir()
        (root / "app_link").symlink_to(real, target_is_directory=True)

        assert DirectoryScanner().discover(root) == []

    def test_descendants_behind_symlink_skipped(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """Projects reachable only through a symlinked directory are skipped."""
        outside = tmp_path / "outside"
        make_project(outside / "deep" / "app")
        root = tmp_path / "root"
        make_project(root / "local")
        (root / "linked").symlink_to(outside, target_is_directory=True)

        assert _paths(DirectoryScanner(), root) == [root / "local"]

    def test_symlink_cycle_terminates(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """A symlink pointing back up the tree does not cause a loop."""
        root = tmp_path / "root"
        make_project(root / "app")
        (root / "app" / "loop").symlink_to(root, target_is_directory=True)

        assert _paths(DirectoryScanner(), root) == [root / "app"]

    def test_symlinked_root_skipped(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """A root that is itself a symlink is not traversed."""
        real = tmp_path / "real"
        make_project(real / "app")
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)

        assert DirectoryScanner().discover(link) == []

    def test_dangling_symlink_ignored(self, tmp_path: Path) -> None:
        """Broken symlinks are skipped without errors."""
        (tmp_path / "broken").symlink_to(tmp_path / "missing")
        notifier = RecordingNotifier()

        assert DirectoryScanner(notifier=notifier).discover(tmp_path) == []
        assert notifier.events == []


class TestRootErrors:
    """Tests for root path validation."""

    def test_missing_root(self, tmp_path: Path) -> None:
        """A nonexistent root raises RootNotFoundError."""
        missing = tmp_path / "missing"
        with pytest.raises(RootNotFoundError) as exc_info:
            DirectoryScanner().discover(missing)

        assert exc_info.value.path == missing
        assert "does not exist" in str(exc_info.value)

    def test_root_is_file(self, tmp_path: Path) -> None:
        """A file root raises RootNotADirectoryError."""
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(RootNotADirectoryError) as exc_info:
            DirectoryScanner().discover(target)

        assert "not a directory" in str(exc_info.value)

    def test_error_hierarchy(self) -> None:
        """Both root errors share the RootPathError and ScanError bases."""
        assert issubclass(RootNotFoundError, RootPathError)
        assert issubclass(RootNotADirectoryError, RootPathError)
        assert issubclass(RootPathError, ScanError)

    def test_root_below_unsearchable_parent(self, tmp_path: Path) -> None:
        """A root that cannot be stat'ed raises RootUnreadableError."""
        root = tmp_path / "hidden"
        real_exists = Path.exists

        def fake_exists(self: Path, *args: object, **kwargs: object) -> bool:
            if self == root:
                raise PermissionError(13, "Permission denied", str(self))
            return real_exists(self, *args, **kwargs)  # type: ignore[arg-type]

        with (
            patch.object(Path, "exists", fake_exists),
            pytest.raises(RootUnreadableError) as exc_info,
        ):
            check_root(root)

        assert isinstance(exc_info.value, RootPathError)
        assert exc_info.value.path == root
        assert "Permission denied" in str(exc_info.value)

    def test_iter_projects_checks_root_eagerly(self, tmp_path: Path) -> None:
        """iter_projects raises before iteration starts."""
        with pytest.raises(RootNotFoundError):
            DirectoryScanner().iter_projects(tmp_path / "missing")


class TestAccessErrors:
    """Tests for unreadable subdirectories."""

    def test_unreadable_subtree_does_not_abort(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """A directory that cannot be listed is reported and skipped."""
        make_project(tmp_path / "a_locked")
        make_project(tmp_path / "a_locked" / "inner")
        make_project(tmp_path / "b_open")
        locked = tmp_path / "a_locked"
        real_scandir = os.scandir

        def fake_scandir(path: object) -> object:
            if Path(path) == locked:  # type: ignore[arg-type]
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)  # type: ignore[arg-type]

        notifier = RecordingNotifier()
        with patch("fclean.scanner.scanner.os.scandir", side_effect=fake_scandir):
            found = _paths(DirectoryScanner(notifier=notifier), tmp_path)

        # The locked directory itself still validates; its children are not reached
        assert found == [locked, tmp_path / "b_open"]
        assert notifier.of("scan_error") == [(locked, "Permission denied")]

    def test_unreadable_subtree_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Enumeration failures are logged as warnings."""
        (tmp_path / "locked").mkdir()
        real_scandir = os.scandir

        def fake_scandir(path: object) -> object:
            if Path(path).name == "locked":  # type: ignore[arg-type]
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)  # type: ignore[arg-type]

        with (
            patch("fclean.scanner.scanner.os.scandir", side_effect=fake_scandir),
            caplog.at_level("WARNING", logger="fclean.scanner.scanner"),
        ):
            assert DirectoryScanner().discover(tmp_path) == []

        assert "Cannot read directory" in caplog.text

    def test_unsearchable_parent_does_not_abort(
        self, tmp_path: Path, make_project: Callable[[Path], Path]
    ) -> None:
        """A child that cannot be lstat'ed is reported and skipped."""
        (tmp_path / "locked" / "child").mkdir(parents=True)
        make_project(tmp_path / "good")
        child = tmp_path / "locked" / "child"
        real_is_symlink = Path.is_symlink

        # Listing an r-- directory works but lstat on its children fails
        def fake_is_symlink(self: Path) -> bool:
            if self == child:
                raise PermissionError(13, "Permission denied", str(self))
            return real_is_symlink(self)

        notifier = RecordingNotifier()
        with patch.object(Path, "is_symlink", fake_is_symlink):
            found = _paths(DirectoryScanner(notifier=notifier), tmp_path)

        assert found == [tmp_path / "good"]
        assert notifier.of("scan_error") == [(child, "Permission denied")]
