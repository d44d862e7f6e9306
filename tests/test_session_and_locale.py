import json

import pytest

from services.locale_service import Locale
from services.session import EXPIRED, Session
from utils.app_config import AppConfig


# ── Config file ──────────────────────────────────────────────────────────────

def test_config_missing_file_is_empty(tmp_path):
    assert AppConfig(tmp_path / "nowhere").load() == {}


def test_config_corrupt_file_is_empty(tmp_path):
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    assert AppConfig(tmp_path).load() == {}


def test_config_update_merges_and_none_removes(config):
    config.update(locale="en", token="t")
    config.update(token=None, username="bob")
    assert config.load() == {"locale": "en", "username": "bob"}
    assert not config.config_file.with_suffix(".tmp").exists()


# ── Session ──────────────────────────────────────────────────────────────────

def test_session_survives_restart(config):
    Session(config).start("tok", "alice")
    restored = Session(config)
    assert restored.restore()
    assert restored.token == "tok"
    assert restored.user.username == "alice"


def test_half_persisted_session_is_ignored(config):
    config.update(token="tok")
    session = Session(config)
    assert not session.restore()
    assert not session.is_authenticated


def test_expire_clears_storage_and_notifies(config):
    session = Session(config)
    session.start("tok", "alice")
    reasons = []
    session.on_end(reasons.append)

    session.expire()

    assert reasons == [EXPIRED]
    assert config.get("token") is None
    assert config.get("username") is None


def test_ending_without_session_is_silent(config):
    session = Session(config)
    reasons = []
    session.on_end(reasons.append)
    session.clear()
    assert reasons == []


# ── Locale ───────────────────────────────────────────────────────────────────

def test_default_locale_is_russian(config):
    locale = Locale(config)
    locale.restore()
    assert locale.code == "ru"
    assert locale.icu == "ru_RU"
    assert locale.t("navigation.calendar") != "navigation.calendar"


def test_missing_key_comes_back_verbatim(config):
    locale = Locale(config)
    locale.restore()
    assert locale.t("calendar.noSuchThing") == "calendar.noSuchThing"
    assert locale.t("calendar") == "calendar"
    assert locale.t("Invalid type: GIFT") == "Invalid type: GIFT"


def test_set_persists_and_notifies(config):
    locale = Locale(config)
    locale.restore()
    changes = []
    locale.on_change(changes.append)

    locale.set("en")

    assert changes == ["en"]
    assert locale.t("common.cancel") == "Cancel"
    again = Locale(config)
    again.restore()
    assert again.code == "en"


def test_unsupported_locale_is_rejected(config):
    locale = Locale(config)
    with pytest.raises(ValueError):
        locale.set("de")
    assert locale.code == "ru"


def test_unknown_saved_locale_falls_back_to_default(config):
    config.update(locale="de")
    locale = Locale(config)
    locale.restore()
    assert locale.code == "ru"


def test_broken_translation_file_uses_english(config, tmp_path):
    locales_dir = tmp_path / "locales"
    locales_dir.mkdir()
    (locales_dir / "en.json").write_text(json.dumps({"common": {"save": "Save"}}), encoding="utf-8")
    (locales_dir / "ru.json").write_text("{broken", encoding="utf-8")

    locale = Locale(config, locales_dir=locales_dir)
    locale.restore()

    assert locale.code == "ru"
    assert locale.t("common.save") == "Save"


@pytest.mark.parametrize("code", ["en", "ru", "th"])
def test_every_locale_has_the_same_keys(code, config):
    def keys(tree, prefix=""):
        out = set()
        for k, v in tree.items():
            out |= keys(v, f"{prefix}{k}.") if isinstance(v, dict) else {f"{prefix}{k}"}
        return out

    reference = Locale(config)
    reference.set("en")
    english = keys(reference._translations)

    other = Locale(config)
    other.set(code)
    assert keys(other._translations) == english
