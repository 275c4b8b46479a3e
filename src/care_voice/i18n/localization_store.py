"""
Localization store for CareVoice
Static language code -> key/value translation tables loaded from bundled JSON
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

LOCALES_PATH = Path(__file__).parent / "locales"


class LocalizationStore:
    """Read-only translation tables keyed by language code"""

    def __init__(self, locales_path: Union[str, Path, None] = None,
                 tables: Optional[Dict[str, Dict[str, str]]] = None):
        self.locales_path = Path(locales_path) if locales_path else LOCALES_PATH
        self._tables: Dict[str, Dict[str, str]] = {}
        if tables is not None:
            self._tables = {code: dict(table) for code, table in tables.items()}
        else:
            self._load_all_translations()

    def _load_all_translations(self):
        """Load all translation files into memory"""
        if not self.locales_path.exists():
            logger.warning(f"Locales directory not found: {self.locales_path}")
            return

        for json_file in sorted(self.locales_path.glob("*.json")):
            try:
                with open(json_file, 'r', encoding='utf-8') as f:
                    table = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Error loading translation file {json_file}: {e}")
                continue

            if not isinstance(table, dict):
                logger.error(f"Translation file {json_file} is not a key/value object")
                continue

            self._tables[json_file.stem] = {
                str(key): value for key, value in table.items() if isinstance(value, str)
            }
            logger.debug(f"Loaded {len(table)} translations for {json_file.stem}")

        logger.info(f"Loaded translation tables: {', '.join(self._tables) or 'none'}")

    def get(self, language_code: str, key: str) -> Optional[str]:
        """Translation for key in language_code, None when either is unknown"""
        return self._tables.get(language_code, {}).get(key)

    def has_language(self, language_code: str) -> bool:
        return language_code in self._tables

    def languages(self) -> List[str]:
        return list(self._tables)

    def keys(self, language_code: str) -> List[str]:
        return list(self._tables.get(language_code, {}))
