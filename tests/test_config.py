import pytest

from config import (
    DEFAULT_LABEL_NAME,
    DEFAULT_SENDER_ADDRESS,
    DEFAULT_SPREADSHEET_NAME,
    load_settings,
    split_folder_path,
)

ENV_KEYS = [
    "SENDER_ADDRESS",
    "SPREADSHEET_NAME",
    "PROCESSED_LABEL_NAME",
    "TARGET_FOLDER_PATH",
    "LOG_LEVEL",
    "LOG_FILE",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = load_settings()
    assert settings.pipeline.sender_address == DEFAULT_SENDER_ADDRESS
    assert settings.pipeline.spreadsheet_name == DEFAULT_SPREADSHEET_NAME
    assert settings.pipeline.label_name == DEFAULT_LABEL_NAME
    assert settings.pipeline.folder_path == ["Proyectos Personales", "Finanzas Personales"]
    assert settings.log_level == "INFO"
    assert settings.log_file == ""


def test_overrides_from_environment(clean_env):
    clean_env.setenv("SENDER_ADDRESS", "alerts@bank.example")
    clean_env.setenv("SPREADSHEET_NAME", "Gastos")
    clean_env.setenv("PROCESSED_LABEL_NAME", "Gastos/Hecho")
    clean_env.setenv("TARGET_FOLDER_PATH", "/Casa/2025/")

    pipeline = load_settings().pipeline

    assert pipeline.sender_address == "alerts@bank.example"
    assert pipeline.spreadsheet_name == "Gastos"
    assert pipeline.label_name == "Gastos/Hecho"
    assert pipeline.folder_path == ["Casa", "2025"]


def test_empty_variable_falls_back_to_default(clean_env):
    clean_env.setenv("SPREADSHEET_NAME", "")
    assert load_settings().pipeline.spreadsheet_name == DEFAULT_SPREADSHEET_NAME


def test_split_folder_path():
    assert split_folder_path("A / B//C") == ["A", "B", "C"]
    assert split_folder_path("") == []
