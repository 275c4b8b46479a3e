"""
Centralized configuration management using Pydantic for environment variables,
language defaults, speech output/input tuning and logging.

Configuration settings for the CareVoice speech subsystem
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional


class CareVoiceSettings(BaseSettings):
    """Main configuration settings"""

    # Language Settings
    default_language: str = Field(default="en", alias="DEFAULT_LANGUAGE", description="Fallback UI language code")
    language_storage_key: str = Field(default="language", description="Durable store key for the selected language")
    preferences_file: str = Field(default=".care_voice/preferences.json", alias="PREFERENCES_FILE")
    locales_dir: Optional[str] = Field(default=None, alias="LOCALES_DIR", description="Override bundled locale tables")

    # Speech Output Settings
    tts_backend: str = Field(default="pyttsx3", alias="TTS_BACKEND", description="pyttsx3 or gtts")
    speech_rate: float = Field(default=0.8, ge=0.1, le=10.0, alias="SPEECH_RATE", description="Relative speaking rate")
    speech_pitch: float = Field(default=1.0, ge=0.0, le=2.0, alias="SPEECH_PITCH", description="Ignored by the pyttsx3 and gtts backends")
    voice_volume: float = Field(default=1.0, ge=0.0, le=1.0, alias="VOICE_VOLUME")
    fallback_speech_code: str = Field(default="en-US", description="Speech code used when no voice matches")
    temp_audio_dir: str = Field(default="sounds/temp", alias="TEMP_AUDIO_DIR")

    # Speech Input Settings
    navigation_language: str = Field(default="en-US", alias="NAVIGATION_LANGUAGE", description="Recognition language for voice navigation")
    listen_timeout: float = Field(default=8.0, gt=0, description="Seconds to wait for speech to start")
    phrase_time_limit: float = Field(default=10.0, gt=0, description="Maximum phrase length in seconds")
    energy_threshold: int = Field(default=300, description="Recognizer energy threshold")
    pause_threshold: float = Field(default=0.8, description="Seconds of silence that end a phrase")
    calibration_duration: float = Field(default=1.0, ge=0.0, description="Ambient noise calibration in seconds")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        validate_assignment=True
    )

    @field_validator('tts_backend', mode='before')
    @classmethod
    def validate_tts_backend(cls, v):
        value = (v or "").strip().lower()
        if value not in ("pyttsx3", "gtts"):
            raise ValueError("TTS backend must be 'pyttsx3' or 'gtts'")
        return value

    @field_validator('default_language', mode='before')
    @classmethod
    def validate_default_language(cls, v):
        return (v or "en").strip().lower()


class LoggingSettings(BaseSettings):
    """Logging configuration"""

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        alias="LOG_FORMAT"
    )
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Global settings instances (lazy initialization)
_settings = None
_logging_settings = None


def get_settings() -> CareVoiceSettings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = CareVoiceSettings()
    return _settings


def get_logging_settings() -> LoggingSettings:
    """Get the logging settings instance"""
    global _logging_settings
    if _logging_settings is None:
        _logging_settings = LoggingSettings()
    return _logging_settings


def reset_settings():
    """Drop cached settings so the next access re-reads the environment"""
    global _settings, _logging_settings
    _settings = None
    _logging_settings = None
