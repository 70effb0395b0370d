"""Entry-form session state."""
from dataclasses import dataclass
from enum import Enum

from juicetracker.models.juice import JuiceColor


class FormState(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    EDITING = "editing"
    SAVED = "saved"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (FormState.SAVED, FormState.CANCELLED)


@dataclass(frozen=True)
class FormSnapshot:
    """Point-in-time view of an entry-form session."""
    juice_id: int
    name: str
    description: str
    color: JuiceColor
    rating: int
    state: FormState
    is_submittable: bool
