"""Tests for settings resolution."""

from pathlib import Path

import pytest

from kotlincourse.classroom import DEFAULT_PROGRESS_DB
from kotlincourse.config import DEFAULT_LESSONS_DIR, Settings, load_config_file, load_settings


class TestSettings:

    def test_defaults(self):
        settings = load_settings(env={})
        assert settings.lessons_dir == DEFAULT_LESSONS_DIR
        assert settings.progress_db == DEFAULT_PROGRESS_DB
        assert settings.learner_id == "default"
        assert settings.log_level == "INFO"

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            Settings(log_level="chatty")

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError):
            Settings(lesson_dir="typo")

    def test_home_expanded(self):
        settings = Settings(progress_db="~/course/progress.db")
        assert settings.progress_db == Path.home() / "course" / "progress.db"


class TestConfigFile:

    def test_yaml_file(self, tmp_path):
        config = tmp_path / "course.yaml"
        config.write_text("lessons_dir: content/lessons\nlearner_id: alice\n", encoding="utf-8")
        settings = load_settings(config, env={})
        assert settings.lessons_dir == Path("content/lessons")
        assert settings.learner_id == "alice"

    def test_config_from_env_var(self, tmp_path):
        config = tmp_path / "course.yaml"
        config.write_text("learner_id: bob\n", encoding="utf-8")
        settings = load_settings(env={"KOTLIN_COURSE_CONFIG": str(config)})
        assert settings.learner_id == "bob"

    def test_env_overrides_file(self, tmp_path):
        config = tmp_path / "course.yaml"
        config.write_text("learner_id: alice\nlog_level: WARNING\n", encoding="utf-8")
        settings = load_settings(config, env={
            "KOTLIN_COURSE_LEARNER": "carol",
            "KOTLIN_COURSE_PROGRESS_DB": str(tmp_path / "p.db"),
        })
        assert settings.learner_id == "carol"
        assert settings.log_level == "WARNING"
        assert settings.progress_db == tmp_path / "p.db"

    def test_empty_file(self, tmp_path):
        config = tmp_path / "course.yaml"
        config.write_text("", encoding="utf-8")
        assert load_config_file(config) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml", env={})

    def test_non_mapping_file(self, tmp_path):
        config = tmp_path / "course.yaml"
        config.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config_file(config)


class TestDotenv:

    def test_dotenv_loaded(self, tmp_path, monkeypatch):
        # Register the variable with monkeypatch so teardown removes what .env sets.
        monkeypatch.setenv("KOTLIN_COURSE_LEARNER", "placeholder")
        monkeypatch.delenv("KOTLIN_COURSE_LEARNER")
        for var in (
            "KOTLIN_COURSE_CONFIG",
            "KOTLIN_COURSE_LESSONS_DIR",
            "KOTLIN_COURSE_PROGRESS_DB",
            "KOTLIN_COURSE_LOG_LEVEL",
        ):
            monkeypatch.delenv(var, raising=False)

        dotenv = tmp_path / ".env"
        dotenv.write_text("KOTLIN_COURSE_LEARNER=dana\n", encoding="utf-8")
        settings = load_settings(dotenv_path=dotenv)
        assert settings.learner_id == "dana"
