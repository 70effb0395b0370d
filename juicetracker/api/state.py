"""Shared application state (injected into routes)."""
import logging
import threading
import uuid
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from juicetracker.config import BACKGROUND_LOAD, JUICES_PATH, LOAD_WORKERS, MAX_SESSIONS
from juicetracker.core.entry_form import EntryFormController, EntryStore
from juicetracker.core.juice_store import BackgroundFetchStore, JuiceStore
from juicetracker.models.form import FormState

logger = logging.getLogger(__name__)


class AppState:
    def __init__(
        self,
        store: Optional[JuiceStore] = None,
        background_load: bool = BACKGROUND_LOAD,
        max_sessions: int = MAX_SESSIONS,
    ) -> None:
        self.store = store if store is not None else JuiceStore(JUICES_PATH)
        self._executor: Optional[ThreadPoolExecutor] = None
        if background_load:
            self._executor = ThreadPoolExecutor(
                max_workers=LOAD_WORKERS, thread_name_prefix="juice-load"
            )
        self._max_sessions = max(1, max_sessions)
        # Oldest first; routes run on FastAPI's threadpool
        self._sessions: "OrderedDict[str, EntryFormController]" = OrderedDict()
        self._sessions_lock = threading.Lock()

    def _form_store(self) -> EntryStore:
        if self._executor is None:
            return self.store
        return BackgroundFetchStore(self.store, self._executor)

    def open_session(self, juice_id: int = 0) -> tuple[str, EntryFormController]:
        """Start an entry-form session; loads the juice when juice_id > 0.

        When max_sessions forms are already open, the oldest is cancelled.
        """
        session_id = uuid.uuid4().hex

        def _forget(_state: FormState) -> None:
            with self._sessions_lock:
                self._sessions.pop(session_id, None)

        form = EntryFormController(self._form_store(), on_close=_forget)
        evicted = []
        with self._sessions_lock:
            while len(self._sessions) >= self._max_sessions:
                evicted.append(self._sessions.popitem(last=False))
            self._sessions[session_id] = form
        for old_id, old_form in evicted:
            logger.info("Too many open entry forms; cancelling %s", old_id)
            old_form.cancel()
        form.load(juice_id)
        return session_id, form

    def get_session(self, session_id: str) -> EntryFormController | None:
        with self._sessions_lock:
            return self._sessions.get(session_id)

    def session_count(self) -> int:
        with self._sessions_lock:
            return len(self._sessions)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)


_state: AppState | None = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState()
    return _state
