"""メッセージローカライズのテスト"""

import pytest

from src.todo_api.i18n import Translator, parse_accept_language


@pytest.fixture
def translator():
    return Translator(default_locale="en")


def test_translate_default_locale(translator):
    assert translator.translate("VALIDATION_ERRORS.INVALID_TITLE") == "Please provide a title."
    assert translator.translate("DEFAULT_ERRORS.INVALID_REQUEST") == "Invalid request."


def test_translate_japanese(translator):
    assert translator.translate("VALIDATION_ERRORS.INVALID_TITLE", "ja") == "タイトルを入力してください。"


def test_unknown_key_returns_key(translator):
    assert translator.translate("NOPE.MISSING", "ja") == "NOPE.MISSING"


def test_unknown_locale_falls_back_to_default(translator):
    assert translator.translate("DEFAULT_ERRORS.RESOURCE_NOT_FOUND", "fr") == "Resource not found."


def test_missing_key_in_locale_falls_back_to_default(tmp_path):
    (tmp_path / "en.yaml").write_text("A:\n  B: english\n  C: only english\n", encoding="utf-8")
    (tmp_path / "de.yaml").write_text("A:\n  B: deutsch\n", encoding="utf-8")
    translator = Translator(locales_dir=tmp_path)

    assert translator.translate("A.B", "de") == "deutsch"
    assert translator.translate("A.C", "de") == "only english"


def test_unavailable_default_locale_falls_back_to_en():
    assert Translator(default_locale="xx").default_locale == "en"


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, "en"),
        ("", "en"),
        ("ja", "ja"),
        ("ja-JP,ja;q=0.9", "ja"),
        ("fr-FR,fr;q=0.9,ja;q=0.8,en;q=0.7", "ja"),
        ("en;q=0.4,ja;q=0.8", "ja"),
        ("ja;q=0,en", "en"),
        ("*", "en"),
    ],
)
def test_negotiate(translator, header, expected):
    assert translator.negotiate(header) == expected


def test_parse_accept_language_orders_by_quality():
    assert parse_accept_language("da, en-gb;q=0.8, en;q=0.7") == ["da", "en-gb", "en"]
    assert parse_accept_language("en;q=0.5, ja") == ["ja", "en"]
