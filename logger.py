import datetime
import inspect
import logging.config
from pathlib import Path
from typing import Optional

import yaml

from settings import settings

BASE_DIR = Path(__file__).parent.resolve()
LOGS_DIR = BASE_DIR / "logs"
PACKAGE_LOGGERS = ("authoring_engine", "authoring_backend")


def _log_file_for(process_name: str, mode_append: bool) -> Path:
    if mode_append:
        return LOGS_DIR / f"{process_name}.log"
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return LOGS_DIR / f"{process_name}_{timestamp}.log"


def setup_logging(
    config_path: Optional[str] = None,
    process_name: Optional[str] = None,
    mode_append: bool = False,
    level: Optional[str] = None,
) -> None:
    """Configure logging from the YAML dictConfig file.

    File handlers are redirected to one log file per process under `logs/`. With
    `mode_append` the file is reused across runs, otherwise it is timestamped.
    `level` overrides the level of the engine and backend loggers.
    """
    config_path = config_path or settings.LOGGING_CONFIG_PATH
    config_file = Path(config_path) if Path(config_path).is_absolute() else BASE_DIR / config_path
    if not config_file.exists():
        raise FileNotFoundError(f"File {config_file} does not exist.")

    if not process_name:
        process_name = Path(inspect.stack()[1].filename).name.split(".")[0]

    with open(config_file, "r") as file:
        config = yaml.safe_load(file)

    file_handlers = [handler for handler in config.get("handlers", {}).values() if "filename" in handler]
    if file_handlers:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
    for handler in file_handlers:
        handler["filename"] = _log_file_for(process_name, mode_append)

    if level:
        for name in PACKAGE_LOGGERS:
            config.setdefault("loggers", {}).setdefault(name, {})["level"] = level.upper()

    logging.config.dictConfig(config)
