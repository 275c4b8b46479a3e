"""
CareVoice application facade
Builds the language session, speech engines and both navigation assistants from settings
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from .notifications import Notifier, LoggingNotifier
from ..audio.page_reader import PageReader
from ..audio.recognition_backends import GoogleRecognitionBackend, RecognitionBackend
from ..audio.speech_input import SpeechInputEngine
from ..audio.speech_output import SpeechOutputEngine
from ..audio.synthesis_backends import SynthesisBackend, create_synthesis_backend
from ..config.settings import CareVoiceSettings, get_settings
from ..i18n.language_session import LanguageSession
from ..i18n.languages import resolve_language
from ..i18n.localization_store import LocalizationStore
from ..i18n.preferences import JsonFilePreferenceStore, PreferenceStore
from ..i18n.selector import LanguageSelector
from ..navigation.assistant import VoiceNavigationAssistant
from ..navigation.router import Router, InMemoryRouter
from ..navigation.voice_routes import (
    VoiceCommandRouter,
    NAVIGATION_ROUTES,
    NAVIGATION_EXAMPLES,
    FLOATING_ASSISTANT_ROUTES,
    FLOATING_ASSISTANT_EXAMPLES
)

logger = logging.getLogger(__name__)


class CareVoiceApp:
    """Wires the speech subsystem together"""

    def __init__(self,
                 settings: Optional[CareVoiceSettings] = None,
                 router: Optional[Router] = None,
                 notifier: Optional[Notifier] = None,
                 preferences: Optional[PreferenceStore] = None,
                 synthesis_backend: Optional[SynthesisBackend] = None,
                 recognition_backend: Optional[RecognitionBackend] = None,
                 document_locale: Optional[Callable[[str], None]] = None):
        self.settings = settings or get_settings()
        self.router = router or InMemoryRouter()
        self.notifier = notifier or LoggingNotifier()

        self.synthesis_backend = synthesis_backend or create_synthesis_backend(
            self.settings.tts_backend, self.settings.temp_audio_dir
        )
        self.recognition_backend = recognition_backend or GoogleRecognitionBackend(
            listen_timeout=self.settings.listen_timeout,
            phrase_time_limit=self.settings.phrase_time_limit,
            energy_threshold=self.settings.energy_threshold,
            pause_threshold=self.settings.pause_threshold,
            calibration_duration=self.settings.calibration_duration
        )

        if preferences is None:
            preferences = JsonFilePreferenceStore(Path(self.settings.preferences_file))

        self.session = LanguageSession(
            store=LocalizationStore(self.settings.locales_dir),
            preferences=preferences,
            notifier=self.notifier,
            speech_supported=self.synthesis_backend.is_available,
            document_locale=document_locale,
            default_language=resolve_language(self.settings.default_language),
            storage_key=self.settings.language_storage_key
        )

        self.speech = SpeechOutputEngine(
            self.session,
            self.synthesis_backend,
            notifier=self.notifier,
            rate=self.settings.speech_rate,
            pitch=self.settings.speech_pitch,
            volume=self.settings.voice_volume,
            fallback_speech_code=self.settings.fallback_speech_code
        )
        self.selector = LanguageSelector(self.session, self.speech)
        self.page_reader = PageReader(self.speech)

        self.navigation_assistant = self._build_assistant(
            "navigation-assistant", NAVIGATION_ROUTES, NAVIGATION_EXAMPLES
        )
        self.floating_assistant = self._build_assistant(
            "floating-assistant", FLOATING_ASSISTANT_ROUTES, FLOATING_ASSISTANT_EXAMPLES
        )

    def _build_assistant(self, name, routes, examples) -> VoiceNavigationAssistant:
        engine = SpeechInputEngine(self.recognition_backend, self.settings.navigation_language)
        return VoiceNavigationAssistant(
            name,
            engine,
            VoiceCommandRouter(routes, examples),
            self.router,
            notifier=self.notifier,
            language=self.settings.navigation_language
        )

    def dictation_engine(self) -> SpeechInputEngine:
        """Speech input tagged with the active language, for form fields"""
        return SpeechInputEngine(self.recognition_backend, self.session.get_current().speech_code)

    def start(self):
        language = self.session.initialize()
        logger.info(
            f"CareVoice started in {language.display_name} "
            f"(speech output {'enabled' if self.session.is_speech_supported() else 'unavailable'})"
        )
        return language

    def close(self):
        self.navigation_assistant.close()
        self.floating_assistant.close()
        self.speech.stop()
        self.synthesis_backend.close()
        logger.info("CareVoice stopped")
