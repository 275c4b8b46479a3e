"""
Language selector for CareVoice
Switches the active language and announces the change aloud
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .languages import Language, supported_languages, get_language_by_code
from .language_session import LanguageSession
from ..utils.exceptions import SpeechCancelledError, TextToSpeechError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageOption:
    """One entry of the language menu"""
    language: Language
    selected: bool

    @property
    def label(self) -> str:
        return self.language.native_name

    @property
    def caption(self) -> str:
        return self.language.display_name


class LanguageSelector:
    """Menu model for choosing the UI language"""

    def __init__(self, session: LanguageSession, speech=None):
        self.session = session
        self.speech = speech

    def options(self) -> List[LanguageOption]:
        current = self.session.get_current()
        return [LanguageOption(lang, lang is current) for lang in supported_languages()]

    @property
    def can_speak(self) -> bool:
        return self.speech is not None and self.session.is_speech_supported()

    async def select(self, language: Union[Language, str]) -> Optional[Language]:
        """Switch language and, when speech is available, announce it"""
        if not isinstance(language, Language):
            language = get_language_by_code(language)
            if language is None:
                return None

        self.session.set_current(language)
        if self.can_speak:
            await self._say(self.session.translate("languageChanged", name=language.native_name))
        return language

    async def preview(self, language: Language):
        """Speak a language's native name"""
        if self.can_speak:
            await self._say(self.session.translate("languageName", name=language.native_name))

    async def _say(self, text: str):
        try:
            await self.speech.speak(text)
        except SpeechCancelledError:
            logger.debug("Language announcement interrupted")
        except TextToSpeechError as e:
            logger.error(f"Speech error: {e}")
