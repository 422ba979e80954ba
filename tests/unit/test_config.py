"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from smart_todo.config import SmartTodoSettings


def test_settings_defaults(clean_env: Path) -> None:
    settings = SmartTodoSettings()

    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.snapshot_path == Path("tasks.json")


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "LOG_LEVEL=debug",
                "SMART_TODO_LOG_FORMAT=text",
                "SMART_TODO_SNAPSHOT_PATH=data/board.json",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = SmartTodoSettings()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"
    assert settings.snapshot_path == Path("data/board.json")


def test_environment_overrides_dotenv(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (clean_env / ".env").write_text("LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert SmartTodoSettings().log_level == "WARNING"


@pytest.mark.parametrize(
    ("name", "value"),
    [("LOG_LEVEL", "LOUD"), ("SMART_TODO_LOG_FORMAT", "xml")],
)
def test_settings_reject_invalid_values(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        SmartTodoSettings()
