"""Core: juice store, list diffing, entry-form sessions."""
from juicetracker.core.entry_form import EntryFormController
from juicetracker.core.juice_store import BackgroundFetchStore, JuiceStore
from juicetracker.core.list_differ import RowOperation, RowOpKind, diff_juices

__all__ = [
    "EntryFormController",
    "JuiceStore",
    "BackgroundFetchStore",
    "RowOperation",
    "RowOpKind",
    "diff_juices",
]
