"""Message templates for responses and log lines.

Templates live in one JSON file per locale (``resources/en.json``,
``resources/fr.json``, ...) mapping a key to a ``str.format`` template
with positional placeholders such as ``"Customer {0} not found"``.
Switching locale is a configuration change only.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional, Union

from customers_api.config import Config

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
RESOURCES_DIR = Path(__file__).parent / "resources"


class MissingResourceKey(KeyError):
    """Raised when a template key is not present in the catalog."""

    def __init__(self, key: str, locale: str):
        super().__init__(key)
        self.key = key
        self.locale = locale

    def __str__(self):
        return f"No message template named '{self.key}' for locale '{self.locale}'"


class MessageCatalog:

    def __init__(self, templates: Mapping[str, str], locale: str = DEFAULT_LOCALE):
        self._templates = dict(templates)
        self.locale = locale

    def __contains__(self, key: str) -> bool:
        return key in self._templates

    def resolve(self, key: str, *args) -> str:
        """Return the template named ``key`` with ``args`` substituted.

        Raises:
            MissingResourceKey: if ``key`` is not in the catalog.
        """
        try:
            template = self._templates[key]
        except KeyError:
            raise MissingResourceKey(key, self.locale) from None
        return template.format(*args)

    @classmethod
    def load(cls, locale: str = DEFAULT_LOCALE, directory: Optional[Union[str, Path]] = None) -> "MessageCatalog":
        """Read ``<directory>/<locale>.json``.

        Falls back to the default locale when the requested one has no
        file. Raises ``FileNotFoundError`` when neither exists.
        """
        base = Path(directory) if directory else RESOURCES_DIR
        path = base / f"{locale}.json"

        if not path.is_file() and locale != DEFAULT_LOCALE:
            logger.warning("No messages for locale '%s', using '%s'", locale, DEFAULT_LOCALE)
            locale = DEFAULT_LOCALE
            path = base / f"{locale}.json"

        if not path.is_file():
            raise FileNotFoundError(f"Message catalog not found: {path}")

        with path.open(encoding="utf-8") as f:
            templates = json.load(f)

        return cls(templates, locale=locale)


@lru_cache
def get_message_catalog() -> MessageCatalog:
    return MessageCatalog.load(Config.MESSAGE_LOCALE, Config.MESSAGES_DIR)
