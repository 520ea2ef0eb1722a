"""Process-wide environment snapshot.

The snapshot is the last place providers look for base URLs and API tokens,
after request input, the server environment map and ``os.environ``. It is
built once at startup and handed to every provider instance.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from dotenv import dotenv_values

from .settings import Settings

logger = logging.getLogger(__name__)


class EnvironmentSnapshot(Mapping[str, str]):
    """Read-only mapping of variable names to values.

    Entries whose value is ``None`` (e.g., bare ``KEY`` lines in a ``.env``
    file) are dropped.
    """

    def __init__(self, values: Optional[Mapping[str, Optional[str]]] = None):
        cleaned = {k: v for k, v in (values or {}).items() if v is not None}
        self._values = MappingProxyType(cleaned)

    @classmethod
    def from_dotenv(cls, path: str | Path) -> "EnvironmentSnapshot":
        """Capture the variables defined in a dotenv file.

        A missing file yields an empty snapshot.
        """
        path = Path(path)
        if not path.is_file():
            logger.debug(f"No env file at {path}; using empty snapshot")
            return cls()
        values = dotenv_values(path)
        logger.info(f"Captured {len(values)} variables from {path}")
        return cls(values)

    @classmethod
    def from_settings(cls, settings: Settings) -> "EnvironmentSnapshot":
        """Capture the snapshot from the file named by ``settings.env_file``."""
        return cls.from_dotenv(settings.env_file)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        # values are secrets
        return f"EnvironmentSnapshot(keys={sorted(self._values)})"
