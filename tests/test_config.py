from pathlib import Path

from src.todo_api.config import PROJECT_ROOT, Config


def test_from_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("TODO_API_DB_PATH", raising=False)
    config_path = tmp_path / "app_config.yaml"
    config_path.write_text(
        "\n".join(
            [
                "server:",
                "  host: 127.0.0.1",
                "  port: 9000",
                "store:",
                f"  db_path: {tmp_path / 'todos.db'}",
                "i18n:",
                "  default_locale: ja",
                "log:",
                "  level: DEBUG",
                "  file: logs/test.log",
            ]
        ),
        encoding="utf-8",
    )

    config = Config.from_yaml(config_path)
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 9000
    assert config.store.db_path == str(tmp_path / "todos.db")
    assert config.default_locale == "ja"
    assert config.log_level == "DEBUG"
    assert config.log_file == "logs/test.log"


def test_from_yaml_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("TODO_API_DB_PATH", raising=False)
    config = Config.from_yaml(tmp_path / "missing.yaml")

    assert config.server.port == 8000
    assert config.default_locale == "en"
    assert Path(config.store.db_path) == PROJECT_ROOT / "data" / "todos.db"


def test_env_overrides_yaml_db_path(tmp_path, monkeypatch):
    monkeypatch.setenv("TODO_API_DB_PATH", str(tmp_path / "env.db"))
    config = Config.from_yaml(tmp_path / "missing.yaml")
    assert config.store.db_path == str(tmp_path / "env.db")


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TODO_API_HOST", "localhost")
    monkeypatch.setenv("TODO_API_PORT", "8081")
    monkeypatch.setenv("TODO_API_DB_PATH", str(tmp_path / "env.db"))
    monkeypatch.setenv("TODO_API_LOCALE", "ja")

    config = Config.from_env()
    assert config.server.host == "localhost"
    assert config.server.port == 8081
    assert config.store.db_path == str(tmp_path / "env.db")
    assert config.default_locale == "ja"


def test_setup_logger_creates_log_directory(tmp_path):
    from src.todo_api.logger import setup_logger

    log_file = tmp_path / "logs" / "todo_api.log"
    setup_logger(log_level="debug", log_file=str(log_file))
    assert log_file.parent.is_dir()


def test_run_parse_args():
    from src.server.run import parse_args

    args = parse_args(["--host", "127.0.0.1", "--port", "9001"])
    assert args.host == "127.0.0.1"
    assert args.port == 9001
    assert args.config is None
