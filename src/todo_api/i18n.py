"""
メッセージのローカライズ

locales/<locale>.yaml のネストしたマッピングを、ドット区切りのキー
（例: "VALIDATION_ERRORS.INVALID_TITLE"）で参照する。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    flat: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = str(value)
    return flat


def parse_accept_language(header: Optional[str]) -> List[str]:
    """Accept-Languageヘッダを品質値の降順で言語タグのリストに変換"""
    if not header:
        return []

    weighted: List[Tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        pieces = part.strip().split(";")
        tag = pieces[0].strip().lower()
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition("=")
            if name == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, index, tag))

    return [tag for _, _, tag in sorted(weighted)]


class Translator:
    """メッセージキーから表示用テキストを返す"""

    def __init__(
        self,
        default_locale: str = "en",
        locales_dir: Optional[Path] = None,
    ) -> None:
        self.locales_dir = Path(locales_dir) if locales_dir else LOCALES_DIR
        self.catalogues: Dict[str, Dict[str, str]] = self._load_catalogues()
        if default_locale not in self.catalogues:
            logger.warning(
                "Default locale %s is not available, falling back to en", default_locale
            )
            default_locale = "en"
        self.default_locale = default_locale

    def _load_catalogues(self) -> Dict[str, Dict[str, str]]:
        catalogues: Dict[str, Dict[str, str]] = {}
        for path in sorted(self.locales_dir.glob("*.yaml")):
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            catalogues[path.stem.lower()] = _flatten(data)
        return catalogues

    @property
    def locales(self) -> Iterable[str]:
        return self.catalogues.keys()

    def negotiate(self, accept_language: Optional[str]) -> str:
        """Accept-Languageヘッダから対応ロケールを選ぶ（該当なしはデフォルト）"""
        for tag in parse_accept_language(accept_language):
            if tag in self.catalogues:
                return tag
            primary = tag.split("-", 1)[0]
            if primary in self.catalogues:
                return primary
        return self.default_locale

    def translate(self, key: str, locale: Optional[str] = None) -> str:
        """キーを翻訳する。未知のキーはキー文字列をそのまま返す"""
        catalogue = self.catalogues.get((locale or "").lower())
        if catalogue is None:
            catalogue = self.catalogues.get(self.default_locale, {})
        message = catalogue.get(key)
        if message is None:
            message = self.catalogues.get(self.default_locale, {}).get(key, key)
        return message
