import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SENDER_ADDRESS = "notificacion@notificacionesbaccr.com"
DEFAULT_SPREADSHEET_NAME = "Finanzas"
DEFAULT_LABEL_NAME = "Finanzas_Procesado"
DEFAULT_FOLDER_PATH = "Proyectos Personales/Finanzas Personales"


def _optional(key: str, default: str = "") -> str:
    return os.getenv(key) or default


def split_folder_path(path: str) -> list[str]:
    """Turn "A/B/C" into ["A", "B", "C"], ignoring empty segments.

    The path is relative to the root of "My Drive", so a leading or
    trailing slash makes no difference.
    """
    return [part.strip() for part in path.split("/") if part.strip()]


@dataclass
class PipelineConfig:
    """Everything the monthly run needs to know about *what* to process."""
    sender_address: str
    spreadsheet_name: str
    label_name: str
    folder_path: list[str] = field(default_factory=list)


@dataclass
class Settings:
    pipeline: PipelineConfig

    # Google
    google_credentials_file: str
    google_token_file: str

    # Logging
    log_level: str
    log_file: str


def load_settings() -> Settings:
    pipeline = PipelineConfig(
        sender_address=_optional("SENDER_ADDRESS", DEFAULT_SENDER_ADDRESS),
        spreadsheet_name=_optional("SPREADSHEET_NAME", DEFAULT_SPREADSHEET_NAME),
        label_name=_optional("PROCESSED_LABEL_NAME", DEFAULT_LABEL_NAME),
        folder_path=split_folder_path(_optional("TARGET_FOLDER_PATH", DEFAULT_FOLDER_PATH)),
    )
    return Settings(
        pipeline=pipeline,
        google_credentials_file=_optional("GOOGLE_CREDENTIALS_FILE", "credentials/google_credentials.json"),
        google_token_file=_optional("GOOGLE_TOKEN_FILE", "credentials/google_token.json"),
        log_level=_optional("LOG_LEVEL", "INFO"),
        log_file=_optional("LOG_FILE", ""),
    )
