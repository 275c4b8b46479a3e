"""
Unit tests for the Language Session.
Tests initialization priority, persistence, translation fallback and advisories.
"""

import pytest
from unittest.mock import Mock

from care_voice.core.notifications import Severity
from care_voice.i18n.language_session import LanguageSession, locale_prefix
from care_voice.i18n.languages import Language
from care_voice.i18n.localization_store import LocalizationStore
from care_voice.i18n.preferences import InMemoryPreferenceStore
from care_voice.utils.exceptions import LanguageSessionNotReadyError
from tests.mocks.fake_speech import RecordingNotifier


def make_session(store=None, stored=None, system_locale=None, notifier=None, **kwargs):
    preferences = InMemoryPreferenceStore({"language": stored} if stored else None)
    return LanguageSession(
        store=store or LocalizationStore(),
        preferences=preferences,
        notifier=notifier or RecordingNotifier(),
        locale_provider=lambda: system_locale,
        **kwargs
    )


@pytest.mark.unit
class TestLocalePrefix:
    """Test runtime locale parsing."""

    @pytest.mark.parametrize("tag,expected", [
        ("hi_IN.UTF-8", "hi"),
        ("en-US", "en"),
        ("ta", "ta"),
        ("C", None),
        ("", None),
        (None, None),
    ])
    def test_prefix(self, tag, expected):
        assert locale_prefix(tag) == expected


@pytest.mark.unit
class TestInitialization:
    """Test initialization priority: storage, runtime locale, default."""

    def test_stored_language_wins(self):
        session = make_session(stored="bn", system_locale="hi_IN.UTF-8")

        assert session.initialize() is Language.BENGALI

    def test_runtime_locale_when_nothing_stored(self):
        session = make_session(system_locale="te_IN.UTF-8")

        assert session.initialize() is Language.TELUGU

    def test_default_when_nothing_available(self):
        session = make_session(system_locale=None)

        assert session.initialize() is Language.ENGLISH

    @pytest.mark.parametrize("stored", ["fr", "xx", "klingon", "hi-IN", "bn-IN"])
    def test_unknown_stored_code_resets_to_default(self, stored):
        session = make_session(stored=stored, system_locale="hi_IN")

        assert session.initialize() is Language.ENGLISH

    def test_unknown_runtime_locale_resets_to_default(self):
        session = make_session(system_locale="de_DE.UTF-8")

        assert session.initialize() is Language.ENGLISH

    def test_initialize_runs_once(self):
        session = make_session(system_locale="hi_IN")
        first = session.initialize()
        session.preferences.set("language", "bn")

        assert session.initialize() is first

    def test_initialize_does_not_persist(self):
        session = make_session(system_locale="hi_IN")
        session.initialize()

        assert session.preferences.get("language") is None

    def test_queries_before_initialize_raise(self):
        session = make_session()

        assert not session.is_initialized
        with pytest.raises(LanguageSessionNotReadyError):
            session.get_current()
        with pytest.raises(LanguageSessionNotReadyError):
            session.translate("dashboard")

    def test_document_locale_set_on_initialize(self):
        updates = []
        session = make_session(stored="hi", document_locale=updates.append)
        session.initialize()

        assert updates == ["hi"]

    def test_speech_capability_probed_once(self):
        probe = Mock(return_value=True)
        session = make_session(speech_supported=probe)

        assert session.is_speech_supported()
        assert session.is_speech_supported()
        probe.assert_called_once()

    def test_failing_capability_probe_means_unsupported(self):
        session = make_session(speech_supported=Mock(side_effect=RuntimeError("no engine")))

        assert session.is_speech_supported() is False


@pytest.mark.unit
class TestSetCurrent:
    """Test explicit language selection."""

    def test_set_current_persists_and_updates_document(self, localization_store):
        updates = []
        session = make_session(store=localization_store, document_locale=updates.append)
        session.initialize()

        assert session.set_current(Language.HINDI)
        assert session.get_current() is Language.HINDI
        assert session.preferences.get("language") == "hi"
        assert updates[-1] == "hi"

    def test_set_current_by_code(self, session):
        assert session.set_current("te")
        assert session.get_current() is Language.TELUGU

    def test_unknown_code_is_ignored(self, session):
        assert session.set_current("xx") is False
        assert session.get_current() is Language.ENGLISH

    def test_listeners_notified_on_change(self, session):
        seen = []
        session.subscribe(seen.append)

        session.set_current(Language.HINDI)
        session.set_current(Language.HINDI)

        assert seen == [Language.HINDI]

    def test_unsubscribe(self, session):
        seen = []
        unsubscribe = session.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        session.set_current(Language.HINDI)

        assert seen == []

    def test_failing_listener_does_not_block_others(self, session):
        seen = []
        session.subscribe(Mock(side_effect=RuntimeError("boom")))
        session.subscribe(seen.append)

        session.set_current(Language.BENGALI)

        assert seen == [Language.BENGALI]

    def test_set_current_twice_is_idempotent(self, session, notifier):
        session.set_current(Language.TAMIL)
        session.set_current(Language.TAMIL)

        assert session.preferences.get("language") == "ta"
        assert len(notifier.messages) == 1

    def test_untranslated_language_advised_once(self, session, notifier):
        session.set_current(Language.TAMIL)
        session.set_current(Language.ENGLISH)
        session.set_current(Language.TAMIL)

        advisories = notifier.with_severity(Severity.INFO)
        assert len(advisories) == 1
        assert "Tamil" in advisories[0]

    def test_translated_language_not_advised(self, session, notifier):
        session.set_current(Language.HINDI)

        assert notifier.messages == []


@pytest.mark.unit
class TestTranslate:
    """Test translation fallback laws."""

    def test_active_language_value(self, session):
        session.set_current(Language.HINDI)

        assert session.translate("dashboard") == "डैशबोर्ड"

    @pytest.mark.parametrize("language", list(Language))
    def test_english_only_key_falls_back_to_english(self, session, language):
        session.set_current(language)

        assert session.translate("readPage") == "Read Page"

    @pytest.mark.parametrize("language", list(Language))
    def test_unknown_key_returns_key(self, session, language):
        session.set_current(language)

        assert session.translate("totally.unknown_key") == "totally.unknown_key"

    def test_format_arguments(self, session):
        assert session.translate("languageChanged", name="తెలుగు") == "Language changed to తెలుగు"

    def test_format_error_returns_unformatted(self, session):
        assert session.translate("languageChanged", other="x") == "Language changed to {name}"

    def test_mostly_untranslated_heuristic(self):
        store = LocalizationStore(tables={
            "en": {"dashboard": "Dashboard", "welcome": "Welcome back", "prescriptions": "Prescriptions"},
            "mr": {"dashboard": "Dashboard", "welcome": "Welcome back", "prescriptions": "Prescriptions"},
            "gu": {"dashboard": "ડેશબોર્ડ"},
        })
        session = make_session(store=store)

        assert session.is_mostly_untranslated(Language.MARATHI)
        assert session.is_mostly_untranslated(Language.TAMIL)
        assert not session.is_mostly_untranslated(Language.GUJARATI)
        assert not session.is_mostly_untranslated(Language.ENGLISH)
