"""Data models for juices and entry-form sessions."""
from juicetracker.models.form import FormSnapshot, FormState
from juicetracker.models.juice import NEW_JUICE_ID, Juice, JuiceColor

__all__ = [
    "Juice",
    "JuiceColor",
    "NEW_JUICE_ID",
    "FormState",
    "FormSnapshot",
]
