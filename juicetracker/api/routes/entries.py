"""Entry-form sessions: open (new or edit), change fields, save, cancel."""
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from juicetracker.api.state import AppState, get_state
from juicetracker.core.entry_form import EntryFormController
from juicetracker.models.form import FormSnapshot

router = APIRouter()


class OpenSessionBody(BaseModel):
    juice_id: int = 0


class FieldChangeBody(BaseModel):
    field: str
    value: Optional[Any] = None


def _snapshot_to_dict(session_id: str, s: FormSnapshot) -> dict:
    return {
        "session_id": session_id,
        "juice_id": s.juice_id,
        "name": s.name,
        "description": s.description,
        "color": s.color.name,
        "rating": s.rating,
        "state": s.state.value,
        "is_submittable": s.is_submittable,
    }


def _require_session(session_id: str, state: AppState) -> EntryFormController:
    form = state.get_session(session_id)
    if form is None:
        raise HTTPException(status_code=404, detail="Entry session not found")
    return form


@router.post("/")
def open_session(body: OpenSessionBody, state: AppState = Depends(get_state)):
    """Open a form for a new juice (juice_id 0) or an existing one."""
    session_id, form = state.open_session(body.juice_id)
    return _snapshot_to_dict(session_id, form.snapshot())


@router.get("/{session_id}")
def get_session(session_id: str, state: AppState = Depends(get_state)):
    form = _require_session(session_id, state)
    return _snapshot_to_dict(session_id, form.snapshot())


@router.patch("/{session_id}")
def change_field(session_id: str, body: FieldChangeBody, state: AppState = Depends(get_state)):
    """Apply one field change; the response carries the new is_submittable."""
    form = _require_session(session_id, state)
    try:
        form.set_field(body.field, body.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot_to_dict(session_id, form.snapshot())


@router.post("/{session_id}/save")
def save_session(session_id: str, state: AppState = Depends(get_state)):
    """Save the juice. 409 while name or description is blank, 503 if storage fails."""
    form = _require_session(session_id, state)
    if not form.is_submittable:
        raise HTTPException(status_code=409, detail="Name and description are required")
    try:
        saved = form.save()
    except OSError:
        raise HTTPException(status_code=503, detail="Juice could not be stored; try again")
    if saved is None:
        raise HTTPException(status_code=409, detail="Entry session is closed")
    return _snapshot_to_dict(session_id, form.snapshot())


@router.post("/{session_id}/cancel")
def cancel_session(session_id: str, state: AppState = Depends(get_state)):
    form = _require_session(session_id, state)
    form.cancel()
    return _snapshot_to_dict(session_id, form.snapshot())
