"""
Custom exceptions for the CareVoice speech subsystem
"""


class CareVoiceError(Exception):
    """Base exception for CareVoice"""
    pass


class ConfigurationError(CareVoiceError):
    """Configuration related errors"""
    pass


class LanguageSessionNotReadyError(CareVoiceError):
    """Language session queried before initialization"""
    pass


class UnsupportedCapabilityError(CareVoiceError):
    """Speech synthesis or recognition is not available in this runtime"""

    def __init__(self, capability: str, message: str = None):
        self.capability = capability
        super().__init__(message or f"Speech {capability} is not supported in this environment")


class AudioError(CareVoiceError):
    """Audio processing related errors"""
    pass


class TextToSpeechError(AudioError):
    """Text-to-speech specific errors"""
    pass


class NoMatchingVoiceError(TextToSpeechError):
    """No installed voice matches the requested language"""

    def __init__(self, speech_code: str):
        self.speech_code = speech_code
        super().__init__(f"No voice installed for {speech_code}")


class SynthesisError(TextToSpeechError):
    """Playback failed mid-utterance"""
    pass


class SpeechCancelledError(TextToSpeechError):
    """Utterance was stopped or superseded before it finished"""
    pass


class SpeechInputError(AudioError):
    """Speech recognition specific errors"""

    def __init__(self, reason: str, message: str = None):
        self.reason = reason
        super().__init__(message or reason)


class NoSpeechDetectedError(SpeechInputError):
    """Recognition ended without any speech"""

    def __init__(self, message: str = None):
        super().__init__("no-speech", message or "No speech detected.")


class RecognitionError(SpeechInputError):
    """Any other recognition failure (permission, network, aborted...)"""
    pass


class RecognitionBusyError(SpeechInputError):
    """A recognition session is already active"""

    def __init__(self):
        super().__init__("busy", "A recognition session is already active")
