"""
Settings helper tests
"""
from pathlib import Path

from narrata.core.config import Settings


def make_settings(**overrides) -> Settings:
    values = dict(
        supabase_jwt_secret="",
        linkedin_client_id="",
        linkedin_client_secret="",
        google_apps_script_url="",
        google_sheets_id="",
        google_sheets_api_key="",
        feedback_channel="apps_script",
        pdl_api_key="",
        llm_api_key="",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_nothing_configured():
    assert make_settings().integration_status() == {
        "supabase_auth": False,
        "linkedin": False,
        "feedback_relay": False,
        "people_data_labs": False,
        "llm": False,
    }


def test_integration_status_needs_complete_credentials():
    status = make_settings(
        supabase_jwt_secret="secret",
        linkedin_client_id="client",
        pdl_api_key="pdl",
        llm_api_key="sk-test",
        google_apps_script_url="https://script.google.com/macros/s/abc/exec",
    ).integration_status()
    assert status["supabase_auth"] and status["people_data_labs"] and status["llm"]
    # Client id without secret is not enough
    assert status["linkedin"] is False
    assert status["feedback_relay"] is True


def test_feedback_relay_follows_channel():
    sheets = make_settings(
        feedback_channel="sheets",
        google_apps_script_url="https://script.google.com/macros/s/abc/exec",
        google_sheets_id="sheet",
    )
    assert sheets.integration_status()["feedback_relay"] is False
    sheets = make_settings(feedback_channel="sheets", google_sheets_id="sheet", google_sheets_api_key="key")
    assert sheets.integration_status()["feedback_relay"] is True


def test_local_dirs(tmp_path):
    settings = make_settings(
        upload_dir=str(tmp_path / "uploads"),
        fallback_store_path=str(tmp_path / "store" / "fallback.json"),
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'db' / 'narrata.db'}",
    )
    assert settings.local_dirs() == [tmp_path / "uploads", tmp_path / "store", tmp_path / "db"]

    memory = make_settings(database_url="sqlite+aiosqlite:///:memory:")
    assert Path(memory.upload_dir) in memory.local_dirs()
    assert len(memory.local_dirs()) == 2

    postgres = make_settings(database_url="postgresql+asyncpg://user:pw@db/narrata")
    assert len(postgres.local_dirs()) == 2
