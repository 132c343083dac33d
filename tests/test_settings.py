import pytest

from kafka_topics.settings import Settings, get_settings, load_environment

ENV_KEYS = ("ENV", "LOG_LEVEL", "KAFKA_ADMIN_CLIENT_ID", "KAFKA_REQUEST_TIMEOUT_MS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so that whatever .env loading writes is undone afterwards
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults_without_env_files(tmp_path):
    assert load_environment(tmp_path) == []
    assert get_settings() == Settings()


def test_dotenv_is_loaded(tmp_path):
    (tmp_path / ".env").write_text(
        "KAFKA_ADMIN_CLIENT_ID=ops-cli\nKAFKA_REQUEST_TIMEOUT_MS=5000\nLOG_LEVEL=info\n"
    )
    load_environment(tmp_path)

    settings = get_settings()
    assert settings.client_id == "ops-cli"
    assert settings.request_timeout_ms == 5000
    assert settings.log_level == "INFO"
    assert settings.client_defaults() == {"client_id": "ops-cli", "request_timeout_ms": 5000}


def test_environment_specific_and_local_overrides(tmp_path):
    (tmp_path / ".env").write_text("ENV=staging\nLOG_LEVEL=INFO\nKAFKA_ADMIN_CLIENT_ID=base\n")
    (tmp_path / ".env.staging").write_text("LOG_LEVEL=ERROR\nKAFKA_ADMIN_CLIENT_ID=staging\n")
    (tmp_path / ".env.local").write_text("KAFKA_ADMIN_CLIENT_ID=local\n")

    loaded = load_environment(tmp_path)

    assert [p.name for p in loaded] == [".env", ".env.staging", ".env.local"]
    settings = get_settings()
    assert settings.log_level == "ERROR"
    assert settings.client_id == "local"


def test_real_environment_wins_over_files(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    (tmp_path / ".env").write_text("LOG_LEVEL=ERROR\n")
    (tmp_path / ".env.local").write_text("LOG_LEVEL=CRITICAL\n")

    load_environment(tmp_path)

    assert get_settings().log_level == "DEBUG"


def test_bad_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("KAFKA_REQUEST_TIMEOUT_MS", "soon")
    monkeypatch.setenv("LOG_LEVEL", "loud")

    settings = get_settings()

    assert settings.request_timeout_ms == 30000
    assert settings.log_level == "WARNING"
