"""
CareVoice Package
Multilingual speech output, speech input and voice navigation for the patient app
"""

from .core.assistant import CareVoiceApp
from .i18n.language_session import LanguageSession
from .audio.speech_output import SpeechOutputEngine
from .audio.speech_input import SpeechInputEngine
from .navigation.voice_routes import VoiceCommandRouter

__all__ = [
    "CareVoiceApp",
    "LanguageSession",
    "SpeechOutputEngine",
    "SpeechInputEngine",
    "VoiceCommandRouter"
]
