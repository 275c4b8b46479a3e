"""
CareVoice Utilities
"""

from .exceptions import (
    CareVoiceError,
    ConfigurationError,
    LanguageSessionNotReadyError,
    UnsupportedCapabilityError,
    AudioError,
    TextToSpeechError,
    NoMatchingVoiceError,
    SynthesisError,
    SpeechCancelledError,
    SpeechInputError,
    NoSpeechDetectedError,
    RecognitionError,
    RecognitionBusyError
)
from .logger import setup_logger

__all__ = [
    "CareVoiceError",
    "ConfigurationError",
    "LanguageSessionNotReadyError",
    "UnsupportedCapabilityError",
    "AudioError",
    "TextToSpeechError",
    "NoMatchingVoiceError",
    "SynthesisError",
    "SpeechCancelledError",
    "SpeechInputError",
    "NoSpeechDetectedError",
    "RecognitionError",
    "RecognitionBusyError",
    "setup_logger"
]
