# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from taskboard.config import Settings, rest_base_url


def test_rest_base_url() -> None:
    assert rest_base_url("https://x.supabase.co") == "https://x.supabase.co/rest/v1"
    assert rest_base_url("https://x.supabase.co/") == "https://x.supabase.co/rest/v1"
    assert rest_base_url("https://x.supabase.co/rest/v1") == "https://x.supabase.co/rest/v1"
    assert rest_base_url("  ") == ""


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKBOARD_BACKEND_URL", "https://x.supabase.co")
    monkeypatch.setenv("TASKBOARD_API_KEY", " key ")
    monkeypatch.setenv("TASKBOARD_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKBOARD_REQUEST_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("TASKBOARD_TASK_PAGE_LIMIT", "50")

    s = Settings.from_env()
    assert s.rest_url == "https://x.supabase.co/rest/v1"
    assert s.api_key == "key"
    assert s.data_dir == tmp_path
    assert s.request_timeout_seconds == 3.5
    assert s.task_page_limit == 50


def test_settings_fallbacks(monkeypatch) -> None:
    for name in ("TASKBOARD_BACKEND_URL", "TASKBOARD_API_KEY", "TASKBOARD_TASK_PAGE_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SUPABASE_URL", "https://y.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("TASKBOARD_REQUEST_TIMEOUT_SECONDS", "not-a-number")

    s = Settings.from_env()
    assert s.backend_url == "https://y.supabase.co"
    assert s.api_key == "anon"
    assert s.request_timeout_seconds == 15.0
    assert s.task_page_limit is None
