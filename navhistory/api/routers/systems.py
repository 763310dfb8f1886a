from fastapi import APIRouter

from navhistory.services.history_store import HistoryStore
from navhistory.utils.datetime_utils import utc_now_iso


def create_systems_router(history_store: HistoryStore):
    router = APIRouter(prefix="/api", tags=["System"])

    @router.get("/health")
    def health():
        return {
            "success": True,
            "message": "Backend server is running",
            "timestamp": utc_now_iso(),
            "historyCount": history_store.state.total,
        }

    return router
