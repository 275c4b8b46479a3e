"""
Language catalog for CareVoice
Fixed set of UI/speech languages with their ISO and BCP-47 speech codes
"""

from enum import Enum
from typing import List, Optional


class Language(Enum):
    """Supported languages with their codes and metadata"""
    ENGLISH = ("en", "English", "English", "en-US")
    HINDI = ("hi", "Hindi", "हिंदी", "hi-IN")
    BENGALI = ("bn", "Bengali", "বাংলা", "bn-IN")
    TELUGU = ("te", "Telugu", "తెలుగు", "te-IN")
    MARATHI = ("mr", "Marathi", "मराठी", "mr-IN")
    TAMIL = ("ta", "Tamil", "தமிழ்", "ta-IN")
    GUJARATI = ("gu", "Gujarati", "ગુજરાતી", "gu-IN")
    KANNADA = ("kn", "Kannada", "ಕನ್ನಡ", "kn-IN")
    MALAYALAM = ("ml", "Malayalam", "മലയാളം", "ml-IN")
    PUNJABI = ("pa", "Punjabi", "ਪੰਜਾਬੀ", "pa-IN")
    ODIA = ("or", "Odia", "ଓଡ଼ିଆ", "or-IN")
    URDU = ("ur", "Urdu", "اردو", "ur-IN")

    def __init__(self, code: str, display_name: str, native_name: str, speech_code: str):
        self.code = code
        self.display_name = display_name
        self.native_name = native_name
        self.speech_code = speech_code

    def __str__(self) -> str:
        return f"{self.display_name} ({self.code})"


DEFAULT_LANGUAGE = Language.ENGLISH


def supported_languages() -> List[Language]:
    """Catalog in display order"""
    return list(Language)


def get_language_by_code(code: Optional[str]) -> Optional[Language]:
    """Get language by ISO code or speech code, case-insensitive"""
    if not code:
        return None
    wanted = code.strip().replace("_", "-").lower()
    for lang in Language:
        if lang.code == wanted or lang.speech_code.lower() == wanted:
            return lang
    return None


def resolve_language(code: Optional[str], default: Language = DEFAULT_LANGUAGE) -> Language:
    """Catalog entry whose ISO code is exactly code, else the default"""
    for lang in Language:
        if lang.code == code:
            return lang
    return default
