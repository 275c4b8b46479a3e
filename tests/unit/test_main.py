"""
Unit tests for the CareVoice console commands.
"""

import pytest

from care_voice.config.settings import CareVoiceSettings
from care_voice.core.assistant import CareVoiceApp
from care_voice.i18n.languages import Language
from care_voice.i18n.preferences import InMemoryPreferenceStore
from care_voice.main import handle_command
from tests.mocks.fake_speech import FakeRecognitionBackend, FakeSynthesisBackend, RecordingNotifier


@pytest.fixture
def app():
    care_voice_app = CareVoiceApp(
        settings=CareVoiceSettings(_env_file=None),
        notifier=RecordingNotifier(),
        preferences=InMemoryPreferenceStore({"language": "en"}),
        synthesis_backend=FakeSynthesisBackend(auto_complete=True),
        recognition_backend=FakeRecognitionBackend(results=["reminders"])
    )
    care_voice_app.start()
    yield care_voice_app
    care_voice_app.close()


@pytest.mark.unit
class TestConsoleCommands:
    """Test console command handling."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("line", ["quit", "EXIT", "  goodbye  "])
    async def test_quit(self, app, line):
        assert await handle_command(app, line) is False

    @pytest.mark.asyncio
    async def test_blank_line(self, app):
        assert await handle_command(app, "   ") is True

    @pytest.mark.asyncio
    async def test_lang(self, app, capsys):
        assert await handle_command(app, "lang hi")

        assert app.session.get_current() is Language.HINDI
        assert "हिंदी" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_unknown_lang(self, app, capsys):
        await handle_command(app, "lang xx")

        assert "Unknown language: xx" in capsys.readouterr().out
        assert app.session.get_current() is Language.ENGLISH

    @pytest.mark.asyncio
    async def test_say_translated_label(self, app):
        await handle_command(app, "say labTests")

        assert app.synthesis_backend.last_utterance.text == "Lab Tests"

    @pytest.mark.asyncio
    async def test_read_page(self, app, tmp_path):
        page = tmp_path / "page.html"
        page.write_text("<p>Blood test tomorrow</p>", encoding="utf-8")

        await handle_command(app, f"read {page}")

        assert app.synthesis_backend.last_utterance.text.endswith("Blood test tomorrow")

    @pytest.mark.asyncio
    async def test_navigate_by_voice(self, app, capsys):
        await handle_command(app, "go")

        assert app.router.get_current_path() == "/reminders"
        assert "/reminders" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_languages_lists_catalog(self, app, capsys):
        await handle_command(app, "languages")

        output = capsys.readouterr().out
        assert "* en" in output
        assert "ଓଡ଼ିଆ" in output

    @pytest.mark.asyncio
    async def test_unknown_command(self, app, capsys):
        assert await handle_command(app, "dance")
        assert "Unknown command: dance" in capsys.readouterr().out
