from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from bank import reload_bank
from deps.auth import admin_token_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/reload")
def reload_questions(error: Annotated[Optional[str], Depends(admin_token_error)]):
    if error:
        return {"ok": False, "error": error}

    n = reload_bank()
    logger.info("static bank reloaded: %d questions", n)
    return {"ok": True, "count": n}
