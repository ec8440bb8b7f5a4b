from fastapi import APIRouter, Body, Depends, Query, Request
from typing import Optional
import logging

from app.core.errors import ValidationError
from app.db.memory import MailStore
from app.schemas.mailbox import GenerateResponse, InboxResponse, ReceiveRequest, ReceiveResponse

router = APIRouter()
logger = logging.getLogger(__name__)

def get_store(request: Request) -> MailStore:
    return request.app.state.store

@router.post("/generate", response_model=GenerateResponse)
async def generate_address(store: MailStore = Depends(get_store)):
    return GenerateResponse(email=store.generate())

@router.get("/inbox", response_model=InboxResponse)
async def list_inbox(
    email: Optional[str] = Query(None),
    store: MailStore = Depends(get_store)
):
    """Messages for one address, newest first."""
    if not email:
        raise ValidationError("Email is required")
    return InboxResponse(messages=store.get_messages(email))

@router.post("/receive", response_model=ReceiveResponse)
async def receive_message(
    payload: Optional[ReceiveRequest] = Body(None),
    store: MailStore = Depends(get_store)
):
    """
    Mock delivery endpoint: accepts a message for a generated address.
    The recipient must be a live address; there is no other admission control.
    """
    payload = payload or ReceiveRequest()
    missing = payload.missing_fields()
    if missing:
        logger.debug(f"Receive rejected, missing: {missing}")
        raise ValidationError("Missing required fields (to, from, subject, body)")

    store.receive(payload.to, payload.from_, payload.subject, payload.body)
    return ReceiveResponse()
