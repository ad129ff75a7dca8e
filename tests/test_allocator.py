import os

import pytest

from sbundle.constants import DEFAULT_PREFIX
from sbundle.core.allocator import new_bundle
from sbundle.core.errors import AllocationError, BundleError, DirectoryCreationError
from sbundle.core.labels import FSLabel

from tests.conftest import FakeFileSystem


class TestRealFilesystem:

    def test_creates_staging_root_and_rootfs(self, tmp_path):
        bundle = new_bundle("mybuild", temp_root=str(tmp_path))
        assert os.path.isdir(bundle.path)
        assert os.path.dirname(bundle.path) == str(tmp_path)
        assert os.path.basename(bundle.path).startswith("mybuild-")
        assert bundle.fs_objects == {"rootfs": "fs"}
        assert bundle.rootfs == os.path.join(bundle.path, "fs")
        assert os.path.isdir(bundle.rootfs)

    def test_empty_prefix_uses_default(self, tmp_path):
        bundle = new_bundle("", temp_root=str(tmp_path))
        assert os.path.basename(bundle.path).startswith(DEFAULT_PREFIX + "-")

    def test_each_bundle_gets_its_own_directory(self, tmp_path):
        first = new_bundle("x", temp_root=str(tmp_path))
        second = new_bundle("x", temp_root=str(tmp_path))
        assert first.path != second.path

    def test_fresh_bundle_defaults(self, tmp_path):
        bundle = new_bundle(temp_root=str(tmp_path))
        assert bundle.metadata == {}
        assert bundle.recipe is None
        assert bundle.bind_paths == []
        assert bundle.sections == []
        assert (bundle.force, bundle.update, bundle.no_test) == (False, False, False)

    def test_missing_temp_root_is_allocation_error(self, tmp_path):
        with pytest.raises(AllocationError) as excinfo:
            new_bundle("x", temp_root=str(tmp_path / "does-not-exist"))
        assert isinstance(excinfo.value.__cause__, OSError)


class TestFakeFilesystem:

    def test_uses_injected_filesystem(self, fake_fs):
        bundle = new_bundle("job", filesystem=fake_fs, temp_root="/fake")
        assert bundle.path == "/fake/job-000001"
        assert fake_fs.directories == {"/fake/job-000001", "/fake/job-000001/fs"}

    def test_unique_dir_failure(self):
        fs = FakeFileSystem(fail_unique=True)
        with pytest.raises(AllocationError) as excinfo:
            new_bundle("job", filesystem=fs, temp_root="/fake")
        assert excinfo.value.temp_root == "/fake"
        assert fs.directories == set()

    def test_rootfs_failure_leaves_staging_root(self):
        fs = FakeFileSystem(fail_paths={"/fake/job-000001/fs"})
        with pytest.raises(DirectoryCreationError) as excinfo:
            new_bundle("job", filesystem=fs, temp_root="/fake")
        assert excinfo.value.path == "/fake/job-000001/fs"
        # No rollback: the staging root stays behind
        assert fs.directories == {"/fake/job-000001"}

    def test_errors_share_base_class(self):
        for fs in (FakeFileSystem(fail_unique=True), FakeFileSystem(fail_paths={"/fake/a-000001/fs"})):
            with pytest.raises(BundleError):
                new_bundle("a", filesystem=fs, temp_root="/fake")

    def test_logger_records_created_directories(self, fake_fs, logger, console_output):
        bundle = new_bundle("job", logger=logger, filesystem=fake_fs, temp_root="/fake")
        assert logger.stats.directories_created == [bundle.path, bundle.resolve(FSLabel.ROOTFS)]
        assert "Created temporary directory for bundle" in console_output.getvalue()

    def test_logger_records_errors(self, logger):
        fs = FakeFileSystem(fail_unique=True)
        with pytest.raises(AllocationError):
            new_bundle("job", logger=logger, filesystem=fs)
        assert len(logger.stats.errors) == 1
