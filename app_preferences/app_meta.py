"""Application identity metadata.

``appId`` is generated the first time the metadata is loaded and stays the
same until the user data directory is removed. ``aid`` is an anonymised
identifier derived from ``appId`` and is the only value meant to be handed to
analytics tools.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from .settings_store import Document, SettingsStore

META_FILE = "app-meta.json"
ANONYMIZED_ID_NAME = "app-meta"


def derive_anonymized_id(app_id: str) -> str:
    """Return the anonymised identifier for ``app_id``.

    The value is a name-based UUID using ``app_id`` as the namespace, so it is
    always the same for the same application id.
    """
    return str(uuid.uuid5(uuid.UUID(app_id), ANONYMIZED_ID_NAME))


def generate_identity() -> Document:
    app_id = str(uuid.uuid4())
    return {"appId": app_id, "aid": derive_anonymized_id(app_id)}


class IdentityMeta:
    """Reads, and on first use creates, ``app-meta.json``."""

    def __init__(
        self,
        *,
        user_data_dir: Path | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.store = SettingsStore(
            file_name=META_FILE,
            default_factory=generate_identity,
            user_data_dir=user_data_dir,
            log=log,
        )

    @property
    def settings_file(self) -> Path:
        return self.store.settings_file

    async def load(self) -> Document:
        return await self.store.load()

    async def get_app_id(self) -> str | None:
        meta = await self.load()
        return meta.get("appId")

    async def get_anonymized_id(self) -> str | None:
        meta = await self.load()
        return meta.get("aid")
