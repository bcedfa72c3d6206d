"""
Tests du script CLI check_env.
"""
import json
import logging

import pytest

from scripts import check_env

FILE_KEYS = ("NODE_ENV", "JWT_ACCESS_EXPIRES_IN", "PORT", "LOG_LEVEL", "SLOW_REQUEST_MS", "JWT_REFRESH_EXPIRES_IN")


@pytest.fixture
def clean_environ(monkeypatch):
    # setenv + delenv : absentes pendant le test, restaurées ensuite (même si le .env les pose)
    for key in FILE_KEYS:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:s3cret@db:5432/app")
    monkeypatch.setenv("JWT_ACCESS_SECRET", "access-secret")
    monkeypatch.setenv("JWT_REFRESH_SECRET", "refresh-secret")
    return monkeypatch


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCheckEnv:
    def test_prints_masked_configuration(self, tmp_path, clean_environ, capsys):
        env_file = tmp_path / ".env.check"
        env_file.write_text('NODE_ENV=test\nJWT_ACCESS_EXPIRES_IN="30m"\n', encoding="utf-8")

        check_env.main(["--env-file", str(env_file)])

        output = json.loads(capsys.readouterr().out)
        assert output["app"]["node_env"] == "test"
        assert output["jwt"]["access_expires_in"] == "30m"
        assert output["jwt"]["access_secret"] == "****"
        assert output["jwt"]["refresh_secret"] == "****"
        assert "s3cret" not in output["database"]["url"]

    def test_invalid_configuration_exits(self, tmp_path, clean_environ):
        clean_environ.delenv("DATABASE_URL")

        with pytest.raises(SystemExit) as exc_info:
            check_env.main(["--env-file", str(tmp_path / "missing.env")])

        assert exc_info.value.code == 1

    def test_non_url_dsn_is_fully_masked(self, tmp_path, clean_environ, capsys):
        clean_environ.setenv("DATABASE_URL", "mysecret-dsn")

        check_env.main(["--env-file", str(tmp_path / "missing.env")])

        output = json.loads(capsys.readouterr().out)
        assert output["database"]["url"] == "****"
