# burnnote/api/notes.py

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import logging

from burnnote.core.errors import NoteValidationError, StoreUnavailable
from burnnote.core.note import NoteService
from burnnote.core.note_logic import parse_note_id
from burnnote.core.rate_limit import UNLOCK_LIMIT, limiter
from burnnote.core.states import Locked, Success, Unavailable, ViewState, ViewStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes")

STATUS_CODES = {
    ViewStatus.LOCKED: 200,
    ViewStatus.SUCCESS: 200,
    ViewStatus.NOT_FOUND: 404,
    ViewStatus.EXPIRED: 410,
    ViewStatus.ALREADY_READ: 410,
    ViewStatus.UNAVAILABLE: 503,
}

class CreateNoteSchema(BaseModel):
    text: str
    password: str

class UnlockNoteSchema(BaseModel):
    password: str


def get_note_service(request: Request) -> NoteService:
    service = getattr(request.app.state, "notes", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Note service not initialized")
    return service


def state_payload(state: ViewState) -> dict:
    """JSON body for a view state. Ciphertext never leaves the server."""
    body = {"status": state.status.value, "id": state.note_id}
    if isinstance(state, Locked) and state.error:
        body["error"] = state.error
    elif isinstance(state, Success):
        body["text"] = state.text
    elif isinstance(state, Unavailable):
        body["detail"] = state.detail
    return body


def state_response(state: ViewState) -> JSONResponse:
    status_code = STATUS_CODES.get(state.status, 200)
    # A rejected password is still the locked state, but the request failed
    if isinstance(state, Locked) and state.error:
        status_code = 401
    return JSONResponse(status_code=status_code, content=state_payload(state))


@router.post("", status_code=201)
def create_note(payload: CreateNoteSchema, service: NoteService = Depends(get_note_service)):
    try:
        link = service.submit_note(payload.text, payload.password)
    except NoteValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail="Note storage is unavailable, try again later.")

    note_id = parse_note_id(link)
    return {"id": note_id, "link": link, "expires_in_days": service.retention.days}


@router.get("/{note_id}")
def view_note(note_id: str, service: NoteService = Depends(get_note_service)):
    return state_response(service.load_note(note_id))


@router.post("/{note_id}/unlock")
@limiter.limit(UNLOCK_LIMIT)
def unlock_note(request: Request, note_id: str, payload: UnlockNoteSchema,
                service: NoteService = Depends(get_note_service)):
    return state_response(service.read_note(note_id, payload.password))
