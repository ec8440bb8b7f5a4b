from fastapi import APIRouter, Depends

from app.api.mailbox import get_store
from app.db.memory import MailStore
from app.schemas.mailbox import HealthResponse

router = APIRouter()

@router.get("/health", response_model=HealthResponse)
async def health(store: MailStore = Depends(get_store)):
    return HealthResponse(active_addresses=store.count())
