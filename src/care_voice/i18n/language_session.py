"""
Language session for CareVoice
Owns the active language, persists it and exposes translation and
speech capability to the rest of the subsystem
"""

import locale
import logging
import os
from typing import Callable, List, Optional, Set, Union

from .languages import Language, DEFAULT_LANGUAGE, get_language_by_code, resolve_language
from .localization_store import LocalizationStore
from .preferences import PreferenceStore, InMemoryPreferenceStore
from ..core.notifications import Notifier, LoggingNotifier, Severity
from ..utils.exceptions import LanguageSessionNotReadyError

logger = logging.getLogger(__name__)

LanguageListener = Callable[[Language], None]

# Keys sampled to decide whether a table is mostly untranslated
TRANSLATION_SAMPLE_KEYS = ("dashboard", "welcome", "prescriptions")


def system_locale() -> Optional[str]:
    """Runtime locale tag such as 'hi_IN.UTF-8', or None"""
    try:
        tag = locale.getlocale()[0]
    except ValueError:
        tag = None
    return tag or os.environ.get("LC_ALL") or os.environ.get("LANG")


def locale_prefix(tag: Optional[str]) -> Optional[str]:
    """Two-letter language prefix of a locale tag"""
    if not tag:
        return None
    prefix = tag.strip().replace("_", "-").split("-")[0].split(".")[0].lower()
    return prefix[:2] if len(prefix) >= 2 else None


class LanguageSession:
    """Observable container for the active language"""

    def __init__(self,
                 store: Optional[LocalizationStore] = None,
                 preferences: Optional[PreferenceStore] = None,
                 notifier: Optional[Notifier] = None,
                 speech_supported: Union[bool, Callable[[], bool]] = False,
                 document_locale: Optional[Callable[[str], None]] = None,
                 locale_provider: Callable[[], Optional[str]] = system_locale,
                 default_language: Language = DEFAULT_LANGUAGE,
                 storage_key: str = "language"):
        self.store = store or LocalizationStore()
        self.preferences = preferences if preferences is not None else InMemoryPreferenceStore()
        self.notifier = notifier or LoggingNotifier()
        self.document_locale = document_locale
        self.locale_provider = locale_provider
        self.default_language = default_language
        self.storage_key = storage_key

        self._speech_supported = self._probe(speech_supported)
        self._current: Optional[Language] = None
        self._listeners: List[LanguageListener] = []
        self._advised: Set[str] = set()

    @staticmethod
    def _probe(capability: Union[bool, Callable[[], bool]]) -> bool:
        if callable(capability):
            try:
                return bool(capability())
            except Exception as e:
                logger.warning(f"Speech capability probe failed: {e}")
                return False
        return bool(capability)

    @property
    def is_initialized(self) -> bool:
        return self._current is not None

    def initialize(self) -> Language:
        """Restore the stored language, else the runtime locale, else the default"""
        if self._current is not None:
            return self._current

        code = self.preferences.get(self.storage_key)
        source = "storage"
        if not code:
            code = locale_prefix(self.locale_provider())
            source = "locale"

        language = resolve_language(code, self.default_language)
        if language.code != code:
            logger.info(f"Language {code!r} from {source} not in catalog, using {language.code}")

        self._current = language
        self._apply_document_locale(language)
        logger.info(f"Language session initialized with {language.display_name}")
        return language

    def _require_ready(self) -> Language:
        if self._current is None:
            raise LanguageSessionNotReadyError("Language session used before initialize()")
        return self._current

    def get_current(self) -> Language:
        return self._require_ready()

    def set_current(self, language: Union[Language, str]) -> bool:
        """
        Replace the active language and persist it

        Args:
            language: catalog entry or its code

        Returns:
            True if the language is in the catalog, False otherwise
        """
        self._require_ready()
        if not isinstance(language, Language):
            resolved = get_language_by_code(language)
            if resolved is None:
                logger.warning(f"Language code not supported: {language}")
                return False
            language = resolved

        previous = self._current
        self._current = language
        self.preferences.set(self.storage_key, language.code)
        self._apply_document_locale(language)

        if language is previous:
            return True

        logger.info(f"Language changed from {previous.display_name} to {language.display_name}")
        self._advise_if_untranslated(language)
        self._notify_listeners(language)
        return True

    def translate(self, key: str, **kwargs) -> str:
        """Translation in the active language, then English, then the key itself"""
        current = self._require_ready()

        translation = self.store.get(current.code, key)
        if translation is None and current.code != "en":
            translation = self.store.get("en", key)
        if translation is None:
            logger.debug(f"Translation not found for key: {key}")
            translation = key

        if kwargs:
            try:
                translation = translation.format(**kwargs)
            except (KeyError, IndexError, ValueError) as e:
                logger.warning(f"Error formatting translation for key {key}: {e}")

        return translation

    def is_speech_supported(self) -> bool:
        return self._speech_supported

    def is_mostly_untranslated(self, language: Language) -> bool:
        """True when every sample key still reads as its English value"""
        if language.code == "en":
            return False
        for key in TRANSLATION_SAMPLE_KEYS:
            english = self.store.get("en", key)
            value = self.store.get(language.code, key)
            if value is not None and value != english:
                return False
        return True

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify_listeners(self, language: Language):
        for listener in list(self._listeners):
            try:
                listener(language)
            except Exception as e:
                logger.error(f"Language listener {listener!r} failed: {e}")

    def _advise_if_untranslated(self, language: Language):
        if language.code in self._advised or not self.is_mostly_untranslated(language):
            return
        self._advised.add(language.code)
        self.notifier.notify(
            f"{language.display_name} translations are incomplete; some labels will appear in English.",
            Severity.INFO
        )

    def _apply_document_locale(self, language: Language):
        if self.document_locale is None:
            return
        try:
            self.document_locale(language.code)
        except Exception as e:
            logger.warning(f"Could not update document language to {language.code}: {e}")
