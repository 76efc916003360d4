from datetime import datetime, timezone

from pgauditsetup.services.filesystem import FileSystemService


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


def test_timestamp_is_sortable_and_filename_safe():
    stamp = FileSystemService.timestamp(datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc))

    assert stamp == "2026-03-04T05-06-07"


def test_ensure_dir_creates_missing_directory(tmp_path):
    service = FileSystemService(logger=DummyLogger(), root=str(tmp_path))

    path = service.ensure_dir("backups")
    service.ensure_dir("backups")

    assert path == str(tmp_path / "backups")
    assert (tmp_path / "backups").is_dir()


def test_timestamped_path_is_relative_to_root(tmp_path):
    service = FileSystemService(logger=DummyLogger(), root=str(tmp_path))

    path = service.timestamped_path("logs", "pgaudit-setup", "2026-03-04T05-06-07", suffix=".log")

    assert path == str(tmp_path / "logs" / "pgaudit-setup.2026-03-04T05-06-07.log")
