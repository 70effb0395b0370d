"""Juice list: rows with display data, delete, and diff against a client snapshot."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from juicetracker.api.state import AppState, get_state
from juicetracker.core.juice_store import juice_to_dict
from juicetracker.core.list_differ import diff_juices
from juicetracker.models.juice import MAX_RATING, Juice, JuiceColor, rating_description

router = APIRouter()


class JuiceBody(BaseModel):
    id: int
    name: str
    description: str
    color: str
    rating: int = Field(ge=0, le=MAX_RATING)

    @field_validator("color")
    @classmethod
    def _known_color(cls, v: str) -> str:
        if v not in JuiceColor.__members__:
            raise ValueError(f"Unknown color {v!r}")
        return v

    def to_juice(self) -> Juice:
        return Juice(
            self.id, self.name, self.description, JuiceColor.from_name(self.color), self.rating
        )


class DiffBody(BaseModel):
    old: List[JuiceBody] = []


def _row_to_dict(j: Juice) -> dict:
    out = juice_to_dict(j)
    out["color_label"] = j.color.label
    out["color_value"] = j.color.hex
    out["rating_description"] = rating_description(j.rating)
    return out


def _op_to_dict(op) -> dict:
    return {
        "kind": op.kind.value,
        "position": op.position,
        "to_position": op.to_position,
        "item": _row_to_dict(op.item) if op.item is not None else None,
    }


@router.get("/")
def list_juices(state: AppState = Depends(get_state)):
    """List all juices as list rows."""
    return [_row_to_dict(j) for j in state.store.list_juices()]


@router.post("/diff")
def diff_against_current(body: DiffBody, state: AppState = Depends(get_state)):
    """Row operations turning the client's rendered list into the current one."""
    old = [b.to_juice() for b in body.old]
    new = state.store.list_juices()
    return {
        "operations": [_op_to_dict(op) for op in diff_juices(old, new)],
        "juices": [_row_to_dict(j) for j in new],
    }


@router.get("/{juice_id}")
def get_juice(juice_id: int, state: AppState = Depends(get_state)):
    juice = state.store.fetch_by_id(juice_id)
    if juice is None:
        raise HTTPException(status_code=404, detail="Juice not found")
    return _row_to_dict(juice)


@router.delete("/{juice_id}", status_code=204)
def delete_juice(juice_id: int, state: AppState = Depends(get_state)):
    """Delete a juice."""
    if not state.store.delete(juice_id):
        raise HTTPException(status_code=404, detail="Juice not found")
