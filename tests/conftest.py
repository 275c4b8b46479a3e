"""
Global test configuration and fixtures.
"""

import warnings
import pytest

from care_voice.audio.speech_input import SpeechInputEngine
from care_voice.audio.speech_output import SpeechOutputEngine
from care_voice.i18n.language_session import LanguageSession
from care_voice.i18n.localization_store import LocalizationStore
from care_voice.i18n.preferences import InMemoryPreferenceStore
from care_voice.navigation.router import InMemoryRouter
from tests.mocks.fake_speech import (
    FakeRecognitionBackend,
    FakeSynthesisBackend,
    RecordingNotifier
)

# Suppress deprecation warnings to keep CI output clean
warnings.filterwarnings(
    "ignore",
    message=".*aifc was removed in Python 3.13.*",
    category=DeprecationWarning,
    module=r"speech_recognition.*",
)


@pytest.fixture(scope="session")
def localization_store():
    """Bundled translation tables."""
    return LocalizationStore()


@pytest.fixture
def preferences():
    return InMemoryPreferenceStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def session(localization_store, preferences, notifier):
    """Initialized English session with speech support."""
    language_session = LanguageSession(
        store=localization_store,
        preferences=preferences,
        notifier=notifier,
        speech_supported=True,
        locale_provider=lambda: "en_US.UTF-8"
    )
    language_session.initialize()
    return language_session


@pytest.fixture
def synthesis_backend():
    return FakeSynthesisBackend()


@pytest.fixture
def speech(session, synthesis_backend, notifier):
    return SpeechOutputEngine(session, synthesis_backend, notifier=notifier)


@pytest.fixture
def recognition_backend():
    return FakeRecognitionBackend()


@pytest.fixture
def speech_input(recognition_backend):
    return SpeechInputEngine(recognition_backend, default_language="en-US")


@pytest.fixture
def router():
    return InMemoryRouter("/")


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
