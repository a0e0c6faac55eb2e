"""
設定管理モジュール

関連クラス:
  - server.dependencies.AppContext: この設定から構築される依存関係
  - todo.store.DocumentStore: store.db_path を使用
  - todo_api.i18n.Translator: i18n.default_locale を使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"
DEFAULT_DB_PATH = "data/todos.db"


def _resolve_path(value: str) -> str:
    """相対パスはプロジェクトルート基準で解決する"""
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return str(path)


@dataclass
class ServerConfig:
    """HTTPサーバー設定"""

    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class StoreConfig:
    """ドキュメントストア設定"""

    db_path: str = _resolve_path(DEFAULT_DB_PATH)


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # サーバー設定
    server: ServerConfig = None  # type: ignore

    # ストア設定
    store: StoreConfig = None  # type: ignore

    # メッセージのデフォルトロケール
    default_locale: str = "en"

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/todo_api.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.server is None:
            self.server = ServerConfig()
        if self.store is None:
            self.store = StoreConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス（ファイルが無い場合はデフォルト値）
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path)

        yaml_data: Dict[str, Any] = {}
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}

        server_data = yaml_data.get("server", {})
        store_data = yaml_data.get("store", {})
        i18n_data = yaml_data.get("i18n", {})
        log_data = yaml_data.get("log", {})

        # 環境変数のDBパス指定を優先（テスト・CLIでの切り替え用）
        db_path = os.getenv("TODO_API_DB_PATH") or store_data.get("db_path", DEFAULT_DB_PATH)

        return cls(
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(server_data.get("port", 8000)),
            ),
            store=StoreConfig(db_path=_resolve_path(db_path)),
            default_locale=i18n_data.get("default_locale", "en"),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_api.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            server=ServerConfig(
                host=os.getenv("TODO_API_HOST", "0.0.0.0"),
                port=int(os.getenv("TODO_API_PORT", "8000")),
            ),
            store=StoreConfig(
                db_path=_resolve_path(os.getenv("TODO_API_DB_PATH", DEFAULT_DB_PATH)),
            ),
            default_locale=os.getenv("TODO_API_LOCALE", "en"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/todo_api.log"),
        )
