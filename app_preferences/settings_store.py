"""Persistence engine shared by every settings document."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Union

from .config import StoreOptions, read_document_file, write_document_file
from .utils.paths import default_user_data_dir, resolve_home

logger = logging.getLogger(__name__)

Document = dict[str, Any]
DefaultFactory = Callable[[], Union[Document, Awaitable[Document]]]
Normalizer = Callable[[Any], Document]


class StoreState(str, Enum):
    """Lifecycle of the in-memory document of a single store."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


class SettingsStore:
    """Load and store one JSON document, materialising defaults on first access.

    Behaviour that differs between documents is passed in rather than
    overridden: ``defaults`` is a static document written when the file is
    empty, ``default_factory`` computes one (it may be a coroutine function)
    and ``normalizer`` turns whatever was read, possibly ``None``, into the
    document to keep in memory.
    """

    def __init__(
        self,
        options: StoreOptions | None = None,
        *,
        defaults: Mapping[str, Any] | None = None,
        default_factory: DefaultFactory | None = None,
        normalizer: Normalizer | None = None,
        user_data_dir: Path | None = None,
        log: logging.Logger | None = None,
        **option_values: Any,
    ) -> None:
        if options is None:
            options = StoreOptions.create(**option_values)
        elif option_values:
            options = options.model_copy(update=option_values)
        self.options = options
        self.defaults = dict(defaults) if defaults is not None else None
        self.default_factory = default_factory
        self.normalizer = normalizer
        self.log = log or logger
        self._document: Document | None = None
        self._state = StoreState.UNLOADED
        self._load_lock = asyncio.Lock()
        self.user_settings_dir, self.settings_file = self._setup_paths(
            options, user_data_dir or default_user_data_dir()
        )

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def document(self) -> Document | None:
        """The cached document, ``None`` until something is loaded or set."""
        return self._document

    def set_document(self, document: Document) -> Document:
        self._document = document
        if self._state is not StoreState.LOADING:
            self._state = StoreState.LOADED
        return document

    def ensure_document(self) -> Document:
        """Return the cached document, starting an empty one when nothing is cached."""
        if self._document is None:
            return self.set_document({})
        return self._document

    def _setup_paths(self, options: StoreOptions, user_data_dir: Path) -> tuple[Path, Path]:
        if options.file:
            settings_file = Path(self.resolve_path(options.file))
            return user_data_dir, settings_file

        if options.file_path:
            if options.append_file_path:
                directory = user_data_dir / options.file_path
            else:
                directory = Path(options.file_path)
        else:
            directory = user_data_dir
        return directory, directory / options.file_name

    @staticmethod
    def resolve_path(file: str) -> str:
        """Resolve a settings file path that starts with ``~``."""
        return resolve_home(file)

    async def load(self) -> Document:
        """Return the settings document, reading it from disk on first use.

        Values set on the store while the file is being read are kept: they are
        merged over the document produced from the file.
        """
        if self._state is StoreState.LOADED and self._document is not None:
            return self._document
        async with self._load_lock:
            if self._state is StoreState.LOADED and self._document is not None:
                return self._document
            self._state = StoreState.LOADING
            try:
                try:
                    data = await asyncio.to_thread(self._restore_file, self.settings_file)
                except Exception as exc:
                    self.log.warning("Unable to read settings file %s: %s", self.settings_file, exc)
                    data = None
                return await self._process_settings(data)
            finally:
                if self._document is None:
                    self._state = StoreState.UNLOADED
                else:
                    self._state = StoreState.LOADED

    async def store(self) -> None:
        """Write the cached document to the settings file."""
        if self._document is None:
            self.log.debug("Nothing loaded for %s; skipping write", self.settings_file)
            return
        await asyncio.to_thread(self.write)

    def write(self) -> None:
        """Blocking variant of :meth:`store` for callers without an event loop."""
        if self._document is None:
            self.log.debug("Nothing loaded for %s; skipping write", self.settings_file)
            return
        write_document_file(self.settings_file, self._document)

    @staticmethod
    def _restore_file(path: Path) -> Any:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
            return None
        return read_document_file(path)

    def _adopt(self, document: Document) -> Document:
        pending = self._document
        if pending is not None and pending is not document:
            document.update(pending)
        return self.set_document(document)

    async def _process_settings(self, data: Any) -> Document:
        if self.normalizer is not None:
            return self._adopt(self.normalizer(data))

        if isinstance(data, dict) and data:
            return self._adopt(data)
        if data is not None and not isinstance(data, dict):
            self.log.warning(
                "Settings file %s does not contain an object; ignoring it.", self.settings_file
            )

        if self.defaults is not None:
            document = self._adopt(dict(self.defaults))
            await self.store()
            return document

        if self.default_factory is not None:
            created = self.default_factory()
            if inspect.isawaitable(created):
                created = await created
            document = self._adopt(created)
            await self.store()
            return document

        return self._adopt({})
