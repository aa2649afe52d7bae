from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import allure
import pytest

import wunderlist_status.status.cache as cache_module
from wunderlist_status.status.cache import CacheFormatError, RenderCache

pytestmark = [
    allure.epic("Stale Fallback"),
    allure.feature("Render Cache"),
]


@pytest.mark.parametrize(
    ("text", "saved_at"),
    [
        ("Home ( 1 )\n     Buy milk", datetime(2026, 10, 17, 8, 30, tzinfo=UTC)),
        (
            "Zakupy ( 2 )\n  *  Mleko 🥛 żółć",
            datetime(2026, 1, 2, 3, 4, 5, 678901, tzinfo=UTC),
        ),
        ("", datetime(2026, 10, 17, 23, 59, tzinfo=timezone(timedelta(hours=2)))),
        ("\x1b[31m  !  Overdue\x1b[0m", datetime(2025, 12, 31, tzinfo=UTC)),
    ],
)
def test_save_then_load_returns_same_record(tmp_path: Path, text: str, saved_at: datetime) -> None:
    cache = RenderCache(tmp_path / "output.json")
    cache.save(text, saved_at)

    loaded = cache.load()

    assert loaded.text == text
    assert loaded.saved_at == saved_at
    assert loaded.saved_at.utcoffset() == saved_at.utcoffset()


def test_save_overwrites_previous_record(tmp_path: Path) -> None:
    cache = RenderCache(tmp_path / "output.json")
    cache.save("first", datetime(2026, 10, 16, tzinfo=UTC))
    cache.save("second", datetime(2026, 10, 17, tzinfo=UTC))

    assert cache.load().text == "second"


def test_save_writes_result_and_date_fields(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "output.json"
    RenderCache(path).save("text", datetime(2026, 10, 17, 8, 0, tzinfo=UTC))

    assert json.loads(path.read_text("utf-8")) == {
        "result": "text",
        "date": "2026-10-17T08:00:00+00:00",
    }


def test_load_missing_file_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        RenderCache(tmp_path / "absent.json").load()


def test_save_failure_raises_os_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", "utf-8")

    with pytest.raises(OSError):
        RenderCache(blocker / "output.json").save("text", datetime.now(tz=UTC))


def test_failed_write_keeps_previous_record(tmp_path: Path, monkeypatch) -> None:
    cache = RenderCache(tmp_path / "output.json")
    cache.save("first", datetime(2026, 10, 16, tzinfo=UTC))

    def _fail(*_args, **_kwargs) -> str:
        raise OSError("disk full")

    monkeypatch.setattr(cache_module.json, "dumps", _fail)
    with pytest.raises(OSError, match="disk full"):
        cache.save("second", datetime(2026, 10, 17, tzinfo=UTC))
    monkeypatch.undo()

    assert cache.load().text == "first"
    assert [entry.name for entry in tmp_path.iterdir()] == ["output.json"]


def test_failed_replace_keeps_previous_record(tmp_path: Path, monkeypatch) -> None:
    cache = RenderCache(tmp_path / "output.json")
    cache.save("first", datetime(2026, 10, 16, tzinfo=UTC))

    def _fail(self, target):
        raise PermissionError("read-only")

    monkeypatch.setattr(Path, "replace", _fail)
    with pytest.raises(PermissionError):
        cache.save("second", datetime(2026, 10, 17, tzinfo=UTC))
    monkeypatch.undo()

    assert cache.load().text == "first"
    assert [entry.name for entry in tmp_path.iterdir()] == ["output.json"]


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        '{"result": "text"}',
        '{"result": 1, "date": "2026-10-17T08:00:00+00:00"}',
        '{"result": "text", "date": "last tuesday"}',
    ],
)
def test_load_invalid_content_raises_format_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "output.json"
    path.write_text(content, "utf-8")

    with pytest.raises(CacheFormatError):
        RenderCache(path).load()


def test_load_non_utf8_content_raises_format_error(tmp_path: Path) -> None:
    path = tmp_path / "output.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(CacheFormatError):
        RenderCache(path).load()
