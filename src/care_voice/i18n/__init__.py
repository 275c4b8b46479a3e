"""
Internationalization (i18n) module for CareVoice
Provides the language catalog, translation tables and the active language session
"""

from .languages import Language, DEFAULT_LANGUAGE, supported_languages, get_language_by_code
from .localization_store import LocalizationStore
from .language_session import LanguageSession
from .preferences import PreferenceStore, InMemoryPreferenceStore, JsonFilePreferenceStore
from .selector import LanguageSelector, LanguageOption

__all__ = [
    'Language',
    'DEFAULT_LANGUAGE',
    'supported_languages',
    'get_language_by_code',
    'LocalizationStore',
    'LanguageSession',
    'PreferenceStore',
    'InMemoryPreferenceStore',
    'JsonFilePreferenceStore',
    'LanguageSelector',
    'LanguageOption'
]
