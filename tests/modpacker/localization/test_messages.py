# tests/modpacker/localization/test_messages.py
from __future__ import annotations

import pytest

from modpacker.localization.messages import SUPPORTED_LOCALES, MessageCatalog, _CATALOGS


@pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
def test_every_locale_has_every_key(locale):
    assert set(_CATALOGS[locale]) == set(_CATALOGS["en"])


def test_formats_arguments():
    text = MessageCatalog("en").t("run.summary", ok=2, total=3, results="./results")
    assert text == "Packaged 2/3 mod(s) into './results'"


def test_unknown_locale_falls_back_to_english():
    catalog = MessageCatalog("fr")
    assert catalog.locale == "en"
    assert catalog.t("pause.prompt") == "Press Enter to exit..."


def test_localized_text():
    assert MessageCatalog("zh_cn").t("pause.prompt") == "按回车键退出..."


def test_missing_key_and_missing_argument():
    catalog = MessageCatalog("en")
    assert catalog.t("no.such.key") == "<no.such.key>"
    assert catalog.t("run.aborted") == "Build aborted: {error}"
