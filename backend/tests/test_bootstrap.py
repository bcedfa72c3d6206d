"""
Tests de la séquence de démarrage (.env -> validation -> config / exit 1).
"""
import logging

import pytest

from app.core.bootstrap import bootstrap
from app.core.env import NodeEnv


class TestBootstrap:
    def test_loads_file_then_validates(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            'DATABASE_URL="postgres://from-file"\nJWT_ACCESS_SECRET=a\nJWT_REFRESH_SECRET=b\nNODE_ENV=test\n',
            encoding="utf-8",
        )
        environ = {}

        config = bootstrap(env_file, environ)

        assert config.DATABASE_URL == "postgres://from-file"
        assert config.NODE_ENV is NodeEnv.TEST
        assert environ["NODE_ENV"] == "test"

    def test_inherited_values_win_over_file(self, tmp_path, base_environ):
        env_file = tmp_path / ".env"
        env_file.write_text("PORT=5000\n", encoding="utf-8")
        environ = {**base_environ, "PORT": "4000"}

        config = bootstrap(env_file, environ)

        assert config.PORT == 4000

    def test_missing_file_uses_inherited_environment(self, tmp_path, base_environ):
        config = bootstrap(tmp_path / "missing.env", dict(base_environ))

        assert config.NODE_ENV is NodeEnv.DEVELOPMENT
        assert config.PORT == 3000

    def test_defaults_to_env_in_working_directory(self, tmp_path, monkeypatch, base_environ):
        (tmp_path / ".env").write_text("PORT=3100\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        config = bootstrap(environ=dict(base_environ))

        assert config.PORT == 3100

    def test_invalid_environment_exits_non_zero(self, tmp_path, caplog):
        environ = {"JWT_ACCESS_SECRET": "a", "JWT_REFRESH_SECRET": "b"}

        with caplog.at_level(logging.ERROR, logger="app.bootstrap"):
            with pytest.raises(SystemExit) as exc_info:
                bootstrap(tmp_path / "missing.env", environ)

        assert exc_info.value.code == 1
        messages = [record.getMessage() for record in caplog.records]
        assert "Invalid environment variables:" in messages
        assert any(message.startswith("DATABASE_URL:") for message in messages)

    def test_failure_reports_every_field_once(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="app.bootstrap"):
            with pytest.raises(SystemExit):
                bootstrap(tmp_path / "missing.env", {"PORT": "abc"})

        header = [r for r in caplog.records if r.getMessage() == "Invalid environment variables:"]
        assert len(header) == 1
        assert set(header[0].field_errors) == {
            "PORT",
            "DATABASE_URL",
            "JWT_ACCESS_SECRET",
            "JWT_REFRESH_SECRET",
        }
