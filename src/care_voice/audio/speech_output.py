"""
Speech output engine for CareVoice
Speaks text in the active language, matching an installed voice and
falling back to English when the language has none
"""

import asyncio
import logging
from typing import List, Optional, Set, Tuple

from .synthesis_backends import SynthesisBackend, Utterance, Voice, normalize_lang
from ..core.notifications import Notifier, LoggingNotifier, Severity
from ..i18n.language_session import LanguageSession
from ..i18n.languages import Language
from ..utils.exceptions import (
    NoMatchingVoiceError,
    SpeechCancelledError,
    SynthesisError,
    UnsupportedCapabilityError
)

logger = logging.getLogger(__name__)

# Languages that fall back to English silently
SILENT_FALLBACK_LANGUAGES = ("en", "hi")


def find_matching_voice(voices: List[Voice], language: Language) -> Optional[Voice]:
    """Voice for the exact speech code, else one sharing the language prefix"""
    speech_code = normalize_lang(language.speech_code)
    for voice in voices:
        if voice.normalized_lang == speech_code:
            return voice
    for voice in voices:
        if voice.lang_prefix == language.code:
            return voice
    return None


def find_english_voice(voices: List[Voice], speech_code: str = "en-US") -> Optional[Voice]:
    """Exact fallback speech code first, then any English voice"""
    wanted = normalize_lang(speech_code)
    for voice in voices:
        if voice.normalized_lang == wanted:
            return voice
    for voice in voices:
        if voice.normalized_lang.startswith("en"):
            return voice
    return None


class SpeechOutputEngine:
    """Single-utterance text-to-speech with most-recent-wins playback"""

    def __init__(self,
                 session: LanguageSession,
                 backend: SynthesisBackend,
                 notifier: Optional[Notifier] = None,
                 rate: float = 0.8,
                 pitch: float = 1.0,
                 volume: float = 1.0,
                 fallback_speech_code: str = "en-US"):
        self.session = session
        self.backend = backend
        self.notifier = notifier or LoggingNotifier()
        self.rate = rate
        self.pitch = pitch
        self.volume = volume
        self.fallback_speech_code = fallback_speech_code

        self._current: Optional[Tuple[object, asyncio.Future]] = None
        self._advised: Set[str] = set()

    @property
    def is_supported(self) -> bool:
        return self.session.is_speech_supported()

    @property
    def is_speaking(self) -> bool:
        return self._current is not None and not self._current[1].done()

    def build_utterance(self, text: str, language: Optional[Language] = None) -> Utterance:
        """Utterance for text tagged with the language and its best voice"""
        if language is None:
            language = self.session.get_current()

        utterance = Utterance(
            text=text,
            lang=language.speech_code,
            rate=self.rate,
            pitch=self.pitch,
            volume=self.volume
        )

        voices = self.backend.get_voices()
        try:
            utterance.voice = self._select_voice(voices, language)
        except NoMatchingVoiceError:
            self._advise_english_fallback(language)
            utterance.voice = find_english_voice(voices, self.fallback_speech_code)
            utterance.lang = self.fallback_speech_code
            logger.info(f"No voice for {language.speech_code}, speaking in {utterance.lang}")

        return utterance

    @staticmethod
    def _select_voice(voices: List[Voice], language: Language) -> Voice:
        voice = find_matching_voice(voices, language)
        if voice is None:
            raise NoMatchingVoiceError(language.speech_code)
        return voice

    def _advise_english_fallback(self, language: Language):
        if language.code in SILENT_FALLBACK_LANGUAGES or language.code in self._advised:
            return
        self._advised.add(language.code)
        self.notifier.notify(
            f"{language.display_name} isn't supported for speech on this device. "
            f"Playback will be in English.",
            Severity.WARNING
        )

    async def speak(self, text: str) -> None:
        """
        Speak text in the active language

        Raises:
            UnsupportedCapabilityError: synthesis is not available
            SpeechCancelledError: stopped or superseded by a newer utterance
            SynthesisError: playback failed
        """
        if not self.is_supported:
            raise UnsupportedCapabilityError("synthesis")

        if not text or not text.strip():
            logger.warning("Empty text provided for TTS")
            return

        utterance = self.build_utterance(text.strip())
        self._cancel_current("Utterance superseded by a newer one")

        loop = asyncio.get_running_loop()
        token = object()
        future = loop.create_future()
        self._current = (token, future)

        def on_end():
            loop.call_soon_threadsafe(self._finish, token, None)

        def on_error(reason: str):
            loop.call_soon_threadsafe(self._finish, token, reason)

        logger.debug(f"Speaking in {utterance.lang}: {utterance.text[:50]}...")
        try:
            self.backend.speak(utterance, on_end, on_error)
        except Exception as e:
            self._current = None
            raise SynthesisError(f"Could not start playback: {e}") from e

        try:
            await future
        except asyncio.CancelledError:
            if self._current is not None and self._current[0] is token:
                self.stop()
            raise

    async def speak_translation(self, key: str, **kwargs) -> None:
        """Speak a translated label"""
        await self.speak(self.session.translate(key, **kwargs))

    def _finish(self, token: object, error: Optional[str]):
        if self._current is None or self._current[0] is not token:
            return
        future = self._current[1]
        self._current = None
        if future.done():
            return
        if error is None:
            future.set_result(None)
            logger.debug("Utterance finished")
        else:
            future.set_exception(SynthesisError(error))

    def _cancel_current(self, reason: str) -> bool:
        if self._current is None:
            return False
        future = self._current[1]
        self._current = None
        if not future.done():
            future.set_exception(SpeechCancelledError(reason))
        self.backend.cancel()
        return True

    def stop(self) -> None:
        """Cancel any playing utterance; safe to call repeatedly"""
        if self._cancel_current("Speech stopped"):
            logger.debug("Stopped current speech playback")
