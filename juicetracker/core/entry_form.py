"""Entry-form session: holds the fields of one juice being added or edited.

Save is allowed only while both name and description are non-blank. The record
being edited may load asynchronously; a load result that arrives after the
user has edited a field, after the session closed, or after a newer load is
dropped so user input is never overwritten.
"""
import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional, Protocol, Union

from juicetracker.models.form import FormSnapshot, FormState
from juicetracker.models.juice import NEW_JUICE_ID, Juice, JuiceColor, clamp_rating

logger = logging.getLogger(__name__)

FIELDS = ("name", "description", "color", "rating")

FetchResult = Union[Optional[Juice], "Future[Optional[Juice]]"]


class EntryStore(Protocol):
    """What a form session needs from storage. fetch_by_id may return a Future."""

    def fetch_by_id(self, juice_id: int) -> FetchResult: ...

    def persist(self, juice: Juice) -> Any: ...


def resolve_color(value: Any) -> JuiceColor:
    """Map a selection (member, name, label or index) to a color; anything else is the default."""
    if isinstance(value, JuiceColor):
        return value
    members = list(JuiceColor)
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(members):
            return members[value]
    elif isinstance(value, str):
        key = value.strip().lower()
        for c in members:
            if key in (c.name.lower(), c.label.lower()):
                return c
    return JuiceColor.default()


class EntryFormController:
    """One add/edit session for a single juice."""

    def __init__(
        self,
        store: EntryStore,
        on_close: Optional[Callable[[FormState], None]] = None,
    ) -> None:
        self._store = store
        self._on_close = on_close
        self._lock = threading.RLock()
        self._juice_id = NEW_JUICE_ID
        self._name = ""
        self._description = ""
        self._color = JuiceColor.default()
        self._rating = 0
        self._state = FormState.EMPTY
        self._edited = False
        self._load_token = 0

    # -- derived state

    @property
    def state(self) -> FormState:
        with self._lock:
            return self._state

    @property
    def is_submittable(self) -> bool:
        with self._lock:
            return bool(self._name.strip()) and bool(self._description.strip())

    @property
    def juice_id(self) -> int:
        with self._lock:
            return self._juice_id

    def snapshot(self) -> FormSnapshot:
        with self._lock:
            return FormSnapshot(
                juice_id=self._juice_id,
                name=self._name,
                description=self._description,
                color=self._color,
                rating=self._rating,
                state=self._state,
                is_submittable=self.is_submittable,
            )

    # -- loading

    def load(self, juice_id: int) -> None:
        """Fetch an existing juice into the form. Ids <= 0 mean a new entry (no read)."""
        with self._lock:
            if self._state.is_terminal or juice_id <= NEW_JUICE_ID:
                return
            self._load_token += 1
            token = self._load_token
            self._juice_id = juice_id
        result = self._store.fetch_by_id(juice_id)
        if isinstance(result, Future):
            result.add_done_callback(lambda f: self._on_fetched(token, juice_id, f))
        else:
            self._apply_loaded(token, juice_id, result)

    def _on_fetched(self, token: int, juice_id: int, future: "Future[Optional[Juice]]") -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.warning("Loading juice %s failed: %s", juice_id, exc)
            return
        self._apply_loaded(token, juice_id, future.result())

    def _apply_loaded(self, token: int, juice_id: int, juice: Optional[Juice]) -> None:
        with self._lock:
            if token != self._load_token or self._state.is_terminal:
                logger.debug("Dropping stale load of juice %s", juice_id)
                return
            if juice is None:
                logger.debug("Juice %s not found; form stays a new entry", juice_id)
                self._juice_id = NEW_JUICE_ID
                return
            if self._edited:
                logger.debug("Dropping load of juice %s: form already edited", juice_id)
                return
            self._juice_id = juice.id
            self._name = juice.name
            self._description = juice.description
            self._color = juice.color
            self._rating = clamp_rating(juice.rating)
            self._state = FormState.LOADED

    # -- user edits

    def _begin_edit(self) -> bool:
        if self._state.is_terminal:
            logger.debug("Ignoring edit on closed form (%s)", self._state.value)
            return False
        self._edited = True
        self._state = FormState.EDITING
        return True

    def set_name(self, text: Optional[str]) -> None:
        with self._lock:
            if self._begin_edit():
                self._name = "" if text is None else str(text)

    def set_description(self, text: Optional[str]) -> None:
        with self._lock:
            if self._begin_edit():
                self._description = "" if text is None else str(text)

    def set_rating(self, value: float) -> None:
        """Raises ValueError for a value that is not a finite number; the form is left untouched."""
        rating = clamp_rating(value)
        with self._lock:
            if self._begin_edit():
                self._rating = rating

    def select_color(self, value: Any) -> JuiceColor:
        """Select a color; None or an unknown value falls back to the first color."""
        with self._lock:
            if self._begin_edit():
                self._color = resolve_color(value)
            return self._color

    def set_field(self, field: str, value: Any) -> None:
        if field == "name":
            self.set_name(value)
        elif field == "description":
            self.set_description(value)
        elif field == "color":
            self.select_color(value)
        elif field == "rating":
            self.set_rating(value)
        else:
            raise ValueError(f"Unknown field {field!r}; expected one of {', '.join(FIELDS)}")

    # -- closing

    def save(self) -> Optional[Juice]:
        """Persist the form as a juice. No-op (returns None) unless submittable."""
        with self._lock:
            if self._state.is_terminal:
                logger.warning("Save ignored: form already %s", self._state.value)
                return None
            if not self.is_submittable:
                logger.warning("Save ignored: name and description are required")
                return None
            juice = Juice(
                id=self._juice_id,
                name=self._name,
                description=self._description,
                color=self._color,
                rating=self._rating,
            )
            previous = self._state
            self._state = FormState.SAVED
        try:
            self._store.persist(juice)
        except Exception:
            # Nothing was stored: reopen the form so the user can retry
            with self._lock:
                self._state = previous
            logger.warning("Persisting juice form (id=%s) failed", juice.id, exc_info=True)
            raise
        logger.info("Saved juice form (id=%s)", juice.id)
        self._close(FormState.SAVED)
        return juice

    def cancel(self) -> None:
        """Discard the session without persisting."""
        with self._lock:
            if self._state.is_terminal:
                return
            self._name = ""
            self._description = ""
            self._color = JuiceColor.default()
            self._rating = 0
            self._state = FormState.CANCELLED
        self._close(FormState.CANCELLED)

    def _close(self, state: FormState) -> None:
        if self._on_close is not None:
            self._on_close(state)
