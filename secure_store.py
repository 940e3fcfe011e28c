"""
Local key-value store for the session token and user profile.

Values live in a single JSON file readable only by its owner. A missing or
unreadable file behaves like an empty store.
"""
import json
import os
from typing import Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class SecureStore:
    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("secure_store_unreadable", path=self.path, error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
