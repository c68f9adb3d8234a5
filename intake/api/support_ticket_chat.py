"""
POST /api/support-ticket-chat
=============================
HTTP driver for the ticket-intake dialogue.

Request body:
    { "session_id": "...", "action": "start" | "respond" | "confirm", "data": {...} }

    start   — data.problem_statement
    respond — data.response
    confirm — data.confirmed (JSON boolean)

Response body:
    { "session_id", "next_step", "data": { "question", "summary", "ticket", "external" } }

Errors:
    400 — missing session_id, unknown action, missing or mistyped action data
    404 — unknown / expired session
    409 — verb not valid in the session's current state
    500 — anything else (logged with traceback)

After a confirmed 'finished' step the ticket is dispatched (best-effort) to
the configured tracker / notification sinks, and the session is scheduled
for eviction after the grace period. Expired sessions are purged at the start
of every request and by the periodic task started in main.py.

GET /api/support-ticket-chat/{session_id} returns the collected slots plus
the pending question or draft, so a client can resume after a reconnect.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from intake.core.exceptions import DialoguePreconditionError
from intake.models.slot_model import SlotModel
from intake.models.step_result import StepResult
from intake.services.session_store import SessionEntry, SessionStore
from intake.services.ticket_dispatcher import build_services, dispatch_ticket
from intake.state.dialogue_state import DialogueState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Support Ticket Chat"])

_ACTIONS = ("start", "respond", "confirm")

# Process-wide store; override get_session_store to inject another one.
_session_store = SessionStore()


def get_session_store() -> SessionStore:
    return _session_store


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------
class ChatRequest(BaseModel):
    session_id: Optional[str] = None
    action: str = ""
    data: Optional[Dict[str, Any]] = None


class ChatData(BaseModel):
    question: Optional[Dict[str, Any]] = None
    summary: Optional[Dict[str, Any]] = None
    ticket: Optional[Dict[str, Any]] = None
    external: Optional[Dict[str, Any]] = None


class ChatResponse(BaseModel):
    session_id: str
    next_step: str
    data: ChatData


class SessionView(BaseModel):
    session_id: str
    state: str
    slots: SlotModel
    pending: Optional[ChatData] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _require_data(request: ChatRequest, key: str) -> Any:
    if not request.data or request.data.get(key) is None:
        raise HTTPException(status_code=400, detail=f"Missing {key} in data")
    return request.data[key]


def _require_confirmed(request: ChatRequest) -> bool:
    value = _require_data(request, "confirmed")
    # "false" or 1 must not finalize a ticket
    if not isinstance(value, bool):
        raise HTTPException(status_code=400, detail="confirmed must be a boolean")
    return value


def _open_session(store: SessionStore, session_id: str) -> SessionEntry:
    """Create a session for 'start'; an unstarted or finished session with the same id is replaced."""
    entry = store.get(session_id)
    if entry is not None and entry.controller.state not in (DialogueState.INITIAL, DialogueState.FINISHED):
        raise HTTPException(
            status_code=409,
            detail="Session already in progress. Use respond or confirm.",
        )
    return store.create(session_id)


def _to_data(result: StepResult, external: Optional[dict] = None) -> ChatData:
    return ChatData(
        question=result.question.model_dump() if result.question else None,
        summary=result.summary.model_dump() if result.summary else None,
        ticket=result.ticket.model_dump(mode="json") if result.ticket else None,
        external=external,
    )


def _to_response(session_id: str, result: StepResult, external: Optional[dict] = None) -> ChatResponse:
    return ChatResponse(
        session_id=session_id,
        next_step=result.next_step,
        data=_to_data(result, external),
    )


async def _run_action(request: ChatRequest, entry: SessionEntry) -> StepResult:
    controller = entry.controller
    if request.action == "start":
        return controller.start(str(_require_data(request, "problem_statement")))
    if request.action == "respond":
        return controller.respond(str(_require_data(request, "response")))
    return controller.confirm(_require_confirmed(request))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
@router.post("/support-ticket-chat", response_model=ChatResponse)
async def support_ticket_chat(
    request: ChatRequest,
    store: SessionStore = Depends(get_session_store),
):
    """Advance one intake session by a single turn."""
    store.purge_expired()
    session_id = request.session_id
    if not session_id:
        raise HTTPException(status_code=400, detail="Missing session_id parameter")
    if request.action not in _ACTIONS:
        raise HTTPException(
            status_code=400,
            detail="Invalid action. Supported actions: start, respond, confirm",
        )

    if request.action == "start":
        if not str(_require_data(request, "problem_statement")).strip():
            raise HTTPException(status_code=400, detail="problem_statement must not be empty")
        entry = _open_session(store, session_id)
    else:
        entry = store.get(session_id)
        if entry is None:
            raise HTTPException(
                status_code=404,
                detail="Session not found. Please start a new session.",
            )

    async with entry.lock:
        try:
            result = await _run_action(request, entry)
        except DialoguePreconditionError as exc:
            logger.warning("[API] Session %s: %s", session_id, exc)
            raise HTTPException(status_code=409, detail=str(exc))
        except HTTPException:
            raise
        except Exception as exc:
            logger.error("[API] Error processing session %s: %s", session_id, exc, exc_info=True)
            raise HTTPException(status_code=500, detail="Internal server error")

        external = None
        if result.next_step == DialogueState.FINISHED.value:
            store.mark_finished(session_id)
            tracker, notifier = build_services()
            if tracker is not None or notifier is not None:
                dispatch = await dispatch_ticket(result.ticket, tracker, notifier)
                external = dispatch.to_dict()

    logger.info("[API] Session %s → %s", session_id, result.next_step)
    return _to_response(session_id, result, external)


@router.get("/support-ticket-chat/{session_id}", response_model=SessionView)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Inspect a session's current state, collected slots and pending prompt."""
    store.purge_expired()
    entry = store.get(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found")
    controller = entry.controller
    pending = None
    if controller.state in (DialogueState.ASK_QUESTION, DialogueState.CONFIRM_TICKET):
        pending = _to_data(controller.current_step())
    return SessionView(
        session_id=session_id,
        state=controller.state.value,
        slots=controller.model,
        pending=pending,
    )
