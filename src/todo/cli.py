#!/usr/bin/env python3
"""
TODO管理CLI - ドキュメントストアを直接操作するコマンドラインインターフェース

Usage:
    python -m src.todo.cli list [--format json|text]
    python -m src.todo.cli add --title "タイトル" [--format json|text]
    python -m src.todo.cli get --id ID [--format json|text]
    python -m src.todo.cli update --id ID --title "新タイトル" [--format json|text]
    python -m src.todo.cli delete --id ID [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from src.todo_api.config import Config

from .models import Todo
from .repository import TodoRepository
from .store import DocumentStore


def format_todo_text(todo: Todo) -> str:
    """Todoをテキスト形式で整形"""
    return f"[{todo.id}] {todo.title}"


def _print_todo(todo: Todo, output_format: str, prefix: str = "") -> None:
    if output_format == "json":
        print(json.dumps(todo.serialize(), ensure_ascii=False))
    else:
        print(f"{prefix}{format_todo_text(todo)}")


def _not_found(todo_id: str) -> int:
    print(f"Error: ID {todo_id} のTODOが見つかりません。", file=sys.stderr)
    return 1


def cmd_list(repo: TodoRepository, output_format: str) -> int:
    """Todoリストを表示"""
    items = repo.get_all()
    if output_format == "json":
        print(json.dumps([item.serialize() for item in items], ensure_ascii=False))
    elif not items:
        print("TODOは登録されていません。")
    else:
        for item in items:
            print(format_todo_text(item))
    return 0


def cmd_add(repo: TodoRepository, title: str, output_format: str) -> int:
    """新しいTodoを追加"""
    if not title.strip():
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1

    created = repo.save(Todo(title=title.strip()))
    _print_todo(created, output_format, prefix="追加しました: ")
    return 0


def cmd_get(repo: TodoRepository, todo_id: str, output_format: str) -> int:
    """特定のTodoを取得"""
    todo = repo.find_one({"_id": todo_id})
    if not todo:
        return _not_found(todo_id)
    _print_todo(todo, output_format)
    return 0


def cmd_update(repo: TodoRepository, todo_id: str, title: str, output_format: str) -> int:
    """既存Todoのタイトルを更新"""
    if not title.strip():
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1

    updated = repo.update({"_id": todo_id}, {"$set": {"title": title.strip()}})
    if not updated:
        return _not_found(todo_id)
    _print_todo(updated, output_format, prefix="更新しました: ")
    return 0


def cmd_delete(repo: TodoRepository, todo_id: str, output_format: str) -> int:
    """Todoを削除"""
    result = repo.delete_many({"_id": todo_id})
    if result.deleted_count == 0:
        return _not_found(todo_id)

    if output_format == "json":
        print(json.dumps({"deleted": True, "id": todo_id}, ensure_ascii=False))
    else:
        print(f"削除しました: ID {todo_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TODO管理CLI - ドキュメントストアを直接操作するインターフェース",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="データベースファイルのパス（デフォルト: 設定ファイルのstore.db_path）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    def add_format_option(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--format",
            choices=["json", "text"],
            default="text",
            help="出力フォーマット（デフォルト: text）",
        )

    parser_list = subparsers.add_parser("list", help="TODOリストを表示")
    add_format_option(parser_list)

    parser_add = subparsers.add_parser("add", help="新しいTODOを追加")
    parser_add.add_argument("--title", required=True, help="TODOのタイトル")
    add_format_option(parser_add)

    parser_get = subparsers.add_parser("get", help="特定のTODOを取得")
    parser_get.add_argument("--id", required=True, help="取得するTODOのID")
    add_format_option(parser_get)

    parser_update = subparsers.add_parser("update", help="TODOのタイトルを更新")
    parser_update.add_argument("--id", required=True, help="更新するTODOのID")
    parser_update.add_argument("--title", required=True, help="新しいタイトル")
    add_format_option(parser_update)

    parser_delete = subparsers.add_parser("delete", help="TODOを削除")
    parser_delete.add_argument("--id", required=True, help="削除するTODOのID")
    add_format_option(parser_delete)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)

    db_path = Path(args.db_path) if args.db_path else Path(Config.from_yaml().store.db_path)
    store = DocumentStore(db_path)
    store.connect()
    repo = TodoRepository(store)

    try:
        if args.command == "list":
            return cmd_list(repo, args.format)
        elif args.command == "add":
            return cmd_add(repo, args.title, args.format)
        elif args.command == "get":
            return cmd_get(repo, args.id, args.format)
        elif args.command == "update":
            return cmd_update(repo, args.id, args.title, args.format)
        elif args.command == "delete":
            return cmd_delete(repo, args.id, args.format)
        else:
            print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
            return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
