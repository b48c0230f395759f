# app/events/api.py
import logging
from datetime import timedelta
from fastapi import APIRouter, Depends, Query, Request
from app.shared.http import ok, err
from .schemas import EventIn, DeleteEventIn, EventOut, parse_day
from .store import Event, EventNotFound, EventStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Events"])

# query window widths, in days past the start date
WINDOWS = {"day": 0, "week": 7, "month": 30}

def get_store(request: Request) -> EventStore:
    return request.app.state.store

@router.post("/create_event")
def api_create_event(inb: EventIn, store: EventStore = Depends(get_store)):
    store.create(Event(user_id=inb.user_id, date=inb.date, title=inb.title, text=inb.text))
    return ok("event created")

@router.post("/update_event")
def api_update_event(inb: EventIn, store: EventStore = Depends(get_store)):
    try:
        store.update(inb.user_id, inb.date, inb.title, inb.text)
    except EventNotFound as e:
        logger.info("update: no event for user_id=%s date=%s", e.user_id, e.date)
        err(str(e), code="not_found", status=404)
    return ok("event updated")

@router.post("/delete_event")
def api_delete_event(inb: DeleteEventIn, store: EventStore = Depends(get_store)):
    try:
        store.delete(inb.user_id, inb.date)
    except EventNotFound as e:
        logger.info("delete: no event for user_id=%s date=%s", e.user_id, e.date)
        err(str(e), code="not_found", status=404)
    return ok("event deleted")

def _events_for(window: str, user_id: int, date: str, store: EventStore):
    try:
        start = parse_day(date)
    except ValueError as e:
        err(str(e), code="invalid_date", status=400)
    end = start + timedelta(days=WINDOWS[window])
    events = store.query_range(user_id, start, end)
    return ok([EventOut.from_event(e).model_dump(mode="json") for e in events])

@router.get("/events_for_day")
def api_events_for_day(user_id: int = Query(...), date: str = Query(..., description="YYYY-MM-DD"),
                       store: EventStore = Depends(get_store)):
    return _events_for("day", user_id, date, store)

@router.get("/events_for_week")
def api_events_for_week(user_id: int = Query(...), date: str = Query(..., description="Start date, YYYY-MM-DD"),
                        store: EventStore = Depends(get_store)):
    return _events_for("week", user_id, date, store)

@router.get("/events_for_month")
def api_events_for_month(user_id: int = Query(...), date: str = Query(..., description="Start date, YYYY-MM-DD"),
                         store: EventStore = Depends(get_store)):
    return _events_for("month", user_id, date, store)
