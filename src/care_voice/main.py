#!/usr/bin/env python3
"""
CareVoice console
Try the speech subsystem from a terminal: switch language, speak labels,
read HTML pages aloud and navigate by voice
"""

import asyncio
import sys
from pathlib import Path

from .core.assistant import CareVoiceApp
from .config.settings import get_settings
from .i18n.languages import supported_languages
from .navigation.assistant import RecognitionState
from .utils.exceptions import CareVoiceError
from .utils.logger import setup_logger

QUIT_COMMANDS = ("quit", "exit", "goodbye")


def print_banner():
    """Print application banner"""
    print("=" * 70)
    print("🩺 CareVoice - multilingual speech for the patient app")
    print("=" * 70)


def print_status_info(app: CareVoiceApp):
    """Print system status information"""
    settings = app.settings
    language = app.session.get_current()

    print("✅ System Information:")
    print(f"   Language: {language.display_name} ({language.native_name})")
    print(f"   TTS Backend: {settings.tts_backend}")
    print(f"   Speech Output: {'Available' if app.speech.is_supported else 'Not available'}")
    print(f"   Speech Input: {'Available' if app.navigation_assistant.engine.is_supported else 'Not available'}")
    print(f"   Navigation Language: {settings.navigation_language}")
    print(f"   Preferences: {settings.preferences_file}")


def print_instructions():
    """Print usage instructions"""
    print("\n💡 Commands:")
    print("• languages           list supported languages")
    print("• lang <code>         switch language, e.g. 'lang hi'")
    print("• say <key>           speak a translated label, e.g. 'say labTests'")
    print("• speak <text>        speak free text in the current language")
    print("• read <file.html>    read an HTML page aloud")
    print("• go                  navigate by voice")
    print("• where               show the current page")
    print("• quit                exit")


async def _navigate_by_voice(app: CareVoiceApp):
    assistant = app.navigation_assistant
    if not assistant.start_listening():
        print(f"❌ {assistant.error or 'Already listening'}")
        return

    print("🎤 Listening - say a destination")
    while assistant.state is RecognitionState.LISTENING:
        await asyncio.sleep(0.05)

    if assistant.error:
        print(f"❌ {assistant.error}")
    else:
        print(f"👤 You: {assistant.transcript}")
        print(f"📍 Page: {app.router.get_current_path()}")


async def handle_command(app: CareVoiceApp, line: str) -> bool:
    """
    Run one console command

    Returns:
        False when the console should exit
    """
    command, _, argument = line.strip().partition(" ")
    command = command.lower()
    argument = argument.strip()

    if not command:
        return True
    if command in QUIT_COMMANDS:
        return False

    if command == "languages":
        current = app.session.get_current()
        for language in supported_languages():
            marker = "*" if language is current else " "
            print(f" {marker} {language.code:<3} {language.native_name} ({language.display_name})")
    elif command == "lang":
        language = await app.selector.select(argument)
        if language is None:
            print(f"❌ Unknown language: {argument}")
        else:
            print(f"🌐 {app.session.translate('languageChanged', name=language.native_name)}")
    elif command == "say":
        await app.speech.speak_translation(argument)
    elif command == "speak":
        await app.speech.speak(argument)
    elif command == "read":
        html = Path(argument).read_text(encoding="utf-8")
        if not await app.page_reader.read(html):
            print("⚠️  Nothing was read")
    elif command == "go":
        await _navigate_by_voice(app)
    elif command == "where":
        print(f"📍 Page: {app.router.get_current_path()}")
    else:
        print(f"❓ Unknown command: {command}")
    return True


async def run_console(app: CareVoiceApp):
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, input, "\n> ")
        try:
            if not await handle_command(app, line):
                break
        except (CareVoiceError, OSError) as e:
            print(f"❌ {e}")


def main():
    """Main application entry point"""
    print_banner()

    logger = setup_logger("care_voice")
    logger.info("Starting CareVoice console")

    app = CareVoiceApp(settings=get_settings())
    try:
        app.start()
        print_status_info(app)
        print_instructions()
        print("\n" + "=" * 70)
        asyncio.run(run_console(app))
        return 0
    except (KeyboardInterrupt, EOFError):
        print("\n\n👋 Goodbye!")
        return 0
    except Exception as e:
        logger.error(f"Application error: {e}")
        print(f"\n❌ Application error: {e}")
        return 1
    finally:
        app.close()


if __name__ == "__main__":
    sys.exit(main())
