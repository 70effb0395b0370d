"""Color options for the entry form's color selector."""
from fastapi import APIRouter

from juicetracker.models.juice import JuiceColor

router = APIRouter()


@router.get("/")
def list_colors():
    """All juice colors in selector order; the first is the default."""
    return [
        {"name": c.name, "label": c.label, "value": c.hex, "index": i}
        for i, c in enumerate(JuiceColor)
    ]
