from __future__ import annotations

import io

import pytest

from gamemarket.scripts import create_user
from gamemarket.shared.config import AppConfig, DatabaseConfig


@pytest.fixture()
def db_url(tmp_path, monkeypatch: pytest.MonkeyPatch) -> str:
    url = f"sqlite:///{tmp_path / 'users.db'}"
    config = AppConfig(app_env="test", database=DatabaseConfig(url=url, connect_retries=0))
    monkeypatch.setattr(create_user, "load_config", lambda: config)
    return url


def test_creates_user_from_stdin(
    db_url: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("longenough1\n"))

    assert create_user.main(["alice", "--password-stdin"]) == 0
    out = capsys.readouterr().out
    assert "Created user 'alice'" in out
    assert "longenough1" not in out


def test_duplicate_user_fails(db_url: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("longenough1\n"))
    assert create_user.main(["alice", "--password-stdin"]) == 0

    monkeypatch.setattr("sys.stdin", io.StringIO("longenough1\n"))
    assert create_user.main(["alice", "--password-stdin"]) == 1


def test_short_password_rejected(db_url: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("short\n"))

    assert create_user.main(["alice", "--password-stdin"]) == 2


def test_mismatched_prompt_rejected(db_url: str, monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(["longenough1", "different12"])
    monkeypatch.setattr(create_user.getpass, "getpass", lambda prompt="": next(answers))

    assert create_user.main(["alice"]) == 2
