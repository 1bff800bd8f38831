import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).parent.resolve()


def split_csv(value: Optional[str]) -> list[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


class BaseConfig(BaseSettings):
    # Autocomplete settings
    AUTOCOMPLETE_INDENT_SIZE: int = 2
    AUTOCOMPLETE_DIAGNOSTIC_SOURCE: str = "GraphAutocompleteCore"
    # Built-in type catalogs, used when neither the request nor the profile provides types
    AUTOCOMPLETE_DEFAULT_NODE_TYPES: str = ""
    AUTOCOMPLETE_DEFAULT_LINK_TYPES: str = ""

    LOGGING_CONFIG_PATH: str = "logging-config.yaml"

    @property
    def default_node_types(self) -> list[str]:
        return split_csv(self.AUTOCOMPLETE_DEFAULT_NODE_TYPES)

    @property
    def default_link_types(self) -> list[str]:
        return split_csv(self.AUTOCOMPLETE_DEFAULT_LINK_TYPES)

    @model_validator(mode="after")
    def validate_indent_size(self):
        if self.AUTOCOMPLETE_INDENT_SIZE <= 0:
            raise ValueError("AUTOCOMPLETE_INDENT_SIZE must be a positive number of spaces")
        return self


class DevSettings(BaseConfig):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / "credentials.env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


class ProdSettings(BaseConfig):
    pass


class TestSettings(BaseConfig):
    model_config = SettingsConfigDict(extra="ignore")


def get_settings() -> BaseConfig:
    env = os.getenv("APP_ENV", "dev")
    match env:
        case "dev":
            settings = DevSettings()
        case "prod":
            settings = ProdSettings()
        case "test":
            settings = TestSettings()
        case _:
            raise ValueError("Invalid environment name")

    env_file = settings.model_config.get("env_file")
    if env_file and Path(env_file).exists():
        load_dotenv(
            dotenv_path=env_file,
            encoding=settings.model_config.get("env_file_encoding"),
            override=True,
        )
    return settings


settings = get_settings()
