"""
Integration tests for the wired speech subsystem.
Exercises language selection, speech output and both voice assistants together.
"""

import asyncio
import pytest

from care_voice import CareVoiceApp
from care_voice.config.settings import CareVoiceSettings
from care_voice.core.notifications import Severity
from care_voice.i18n.languages import Language
from care_voice.i18n.preferences import InMemoryPreferenceStore, JsonFilePreferenceStore
from care_voice.navigation.assistant import RecognitionState
from care_voice.navigation.router import InMemoryRouter
from tests.mocks.fake_speech import (
    FakeRecognitionBackend,
    FakeSynthesisBackend,
    RecordingNotifier,
    wait_until
)


def make_app(preferences=None, results=None, **settings_overrides):
    settings = CareVoiceSettings(_env_file=None, **settings_overrides)
    notifier = RecordingNotifier()
    document = []
    app = CareVoiceApp(
        settings=settings,
        router=InMemoryRouter("/"),
        notifier=notifier,
        preferences=preferences if preferences is not None else InMemoryPreferenceStore(),
        synthesis_backend=FakeSynthesisBackend(auto_complete=True),
        recognition_backend=FakeRecognitionBackend(results=results),
        document_locale=document.append
    )
    return app, notifier, document


@pytest.mark.integration
class TestCareVoiceApp:
    """Test the assembled application."""

    @pytest.mark.asyncio
    async def test_language_persists_across_restarts(self, tmp_path):
        preferences = JsonFilePreferenceStore(tmp_path / "preferences.json")
        app, _, document = make_app(preferences=preferences)
        app.start()

        await app.selector.select("hi")
        app.close()

        restarted, _, _ = make_app(preferences=JsonFilePreferenceStore(tmp_path / "preferences.json"))
        assert restarted.start() is Language.HINDI
        assert restarted.session.translate("dashboard") == "डैशबोर्ड"
        assert document[-1] == "hi"

    @pytest.mark.asyncio
    async def test_default_language_from_settings(self, monkeypatch):
        app, _, _ = make_app(default_language="te")
        monkeypatch.setattr(app.session, "locale_provider", lambda: None)

        assert app.start() is Language.TELUGU

    @pytest.mark.asyncio
    async def test_tamil_speech_falls_back_to_english(self):
        app, notifier, _ = make_app()
        app.start()
        app.session.set_current(Language.TAMIL)

        await asyncio.wait_for(app.speech.speak_translation("dashboard"), 1)
        await asyncio.wait_for(app.speech.speak_translation("profile"), 1)

        utterances = app.synthesis_backend.utterances
        assert [u.lang for u in utterances] == ["en-US", "en-US"]
        assert utterances[0].text == "Dashboard"
        assert len(notifier.with_severity(Severity.WARNING)) == 1
        assert len(notifier.with_severity(Severity.INFO)) == 1

    @pytest.mark.asyncio
    async def test_navigation_assistant_routes_spoken_command(self):
        app, _, _ = make_app(results=["go to lab tests"])
        app.start()
        assistant = app.navigation_assistant

        assistant.start_listening()
        await wait_until(lambda: assistant.state is RecognitionState.IDLE)

        assert app.router.get_current_path() == "/lab-tests"
        assert app.recognition_backend.languages == ["en-US"]

    @pytest.mark.asyncio
    async def test_floating_assistant_uses_its_own_table(self):
        app, notifier, _ = make_app(results=["open my medicines", "open my medicines"])
        app.start()

        app.floating_assistant.start_listening()
        await wait_until(lambda: app.floating_assistant.state is RecognitionState.IDLE)
        assert app.router.get_current_path() == "/prescriptions"

        app.router.navigate("/")
        app.navigation_assistant.start_listening()
        await wait_until(lambda: app.navigation_assistant.state is RecognitionState.IDLE)

        assert app.router.get_current_path() == "/"
        assert app.navigation_assistant.last_outcome.matched is False
        assert len(notifier.with_severity(Severity.WARNING)) == 1

    @pytest.mark.asyncio
    async def test_dictation_follows_active_language(self):
        app, _, _ = make_app(results=["दवा"])
        app.start()
        app.session.set_current(Language.HINDI)

        text = await asyncio.wait_for(app.dictation_engine().recognize(), 1)

        assert text == "दवा"
        assert app.recognition_backend.languages == ["hi-IN"]

    @pytest.mark.asyncio
    async def test_read_page_in_active_language(self):
        app, _, _ = make_app()
        app.start()
        app.session.set_current(Language.BENGALI)

        assert await asyncio.wait_for(app.page_reader.read("<h1>ল্যাব টেস্ট</h1>"), 1)

        utterance = app.synthesis_backend.last_utterance
        assert utterance.lang == "bn-IN"
        assert utterance.text.endswith("ল্যাব টেস্ট")

    @pytest.mark.asyncio
    async def test_close_releases_backends(self):
        app, _, _ = make_app()
        app.start()

        app.close()

        assert app.synthesis_backend.closed
        assert app.navigation_assistant.start_listening() is False
