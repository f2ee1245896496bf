"""
Settings for the Kotlin course tools.

Resolution order (later wins):
1. Defaults
2. YAML config file (explicit path or KOTLIN_COURSE_CONFIG)
3. Environment variables, after loading .env from the working directory

Example config file:

    lessons_dir: course/lessons
    progress_db: ~/.kotlin-course/progress.db
    learner_id: alice
    log_level: DEBUG
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from kotlincourse.classroom.store import DEFAULT_PROGRESS_DB


DEFAULT_LESSONS_DIR = Path("lessons")

CONFIG_ENV_VAR = "KOTLIN_COURSE_CONFIG"

# environment variable -> Settings field
ENV_OVERRIDES = {
    "KOTLIN_COURSE_LESSONS_DIR": "lessons_dir",
    "KOTLIN_COURSE_PROGRESS_DB": "progress_db",
    "KOTLIN_COURSE_LEARNER": "learner_id",
    "KOTLIN_COURSE_LOG_LEVEL": "log_level",
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    lessons_dir: Path = DEFAULT_LESSONS_DIR
    progress_db: Path = DEFAULT_PROGRESS_DB
    learner_id: str = Field(default="default", min_length=1)
    log_level: str = "INFO"

    @field_validator('lessons_dir', 'progress_db')
    @classmethod
    def expand_user(cls, v):
        return v.expanduser()

    @field_validator('log_level')
    @classmethod
    def level_known(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load settings values from a YAML file.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the file does not contain a mapping
        yaml.YAMLError: If YAML parsing fails
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def load_settings(
    config_path: Optional[str | Path] = None,
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Path] = None,
) -> Settings:
    """
    Resolve settings from defaults, config file and environment.

    Args:
        config_path: YAML config file; falls back to $KOTLIN_COURSE_CONFIG
        env: Environment mapping (default: os.environ after loading .env)
        dotenv_path: .env file to load (default: ./.env)
    """
    if env is None:
        load_dotenv(dotenv_path or Path.cwd() / ".env")
        env = os.environ

    path = config_path or env.get(CONFIG_ENV_VAR)
    values = load_config_file(Path(path)) if path else {}

    for var, field in ENV_OVERRIDES.items():
        if env.get(var):
            values[field] = env[var]

    return Settings(**values)
