import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from navhistory.exceptions import AtBeginningError, AtEndError, InvalidUrlError
from navhistory.services.history_store import HistoryStore
from navhistory.services.projections import current_state, full_history

logger = logging.getLogger(__name__)


class VisitRequest(BaseModel):
    # Typed loosely so a non-string url is reported as a 400 by the handler,
    # not as a schema validation error.
    url: Optional[Any] = None


def create_history_router(history_store: HistoryStore):
    router = APIRouter(prefix="/api", tags=["History"])

    @router.get("/current")
    def get_current():
        return {"success": True, "data": current_state(history_store.state).to_dict()}

    @router.get("/history")
    def get_history():
        return {"success": True, "data": full_history(history_store.state).to_dict()}

    @router.post("/visit")
    def visit(req: Optional[VisitRequest] = None):
        url = req.url if req is not None else None
        if not url or not isinstance(url, str):
            raise HTTPException(status_code=400, detail="URL is required and must be a string")
        try:
            result = history_store.visit(url)
        except InvalidUrlError:
            raise HTTPException(status_code=400, detail="Invalid URL format")
        except Exception:
            logger.exception("Error visiting page")
            raise HTTPException(status_code=500, detail="Internal server error while visiting page")
        return {
            "success": True,
            "data": result.to_dict(),
            "message": f"Successfully visited: {result.page}",
        }

    @router.post("/back")
    def back():
        try:
            result = history_store.back()
        except AtBeginningError:
            raise HTTPException(status_code=400, detail="Cannot go back - already at the beginning of history")
        except Exception:
            logger.exception("Error going back")
            raise HTTPException(status_code=500, detail="Internal server error while going back")
        return {
            "success": True,
            "data": result.to_dict(),
            "message": f"Went back to: {result.page}",
        }

    @router.post("/forward")
    def forward():
        try:
            result = history_store.forward()
        except AtEndError:
            raise HTTPException(status_code=400, detail="Cannot go forward - already at the end of history")
        except Exception:
            logger.exception("Error going forward")
            raise HTTPException(status_code=500, detail="Internal server error while going forward")
        return {
            "success": True,
            "data": result.to_dict(),
            "message": f"Went forward to: {result.page}",
        }

    @router.delete("/clear")
    def clear():
        try:
            result = history_store.clear()
        except Exception:
            logger.exception("Error clearing history")
            raise HTTPException(status_code=500, detail="Internal server error while clearing history")
        return {
            "success": True,
            "data": result.to_dict(),
            "message": "History cleared successfully",
        }

    return router
