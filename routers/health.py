from fastapi import APIRouter

from generators.registry import available_subtopics, missing_subtopics
from schemas.questions import GeneratorHealth

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/generators", response_model=GeneratorHealth)
def health_generators():
    registered = [s.value for s in available_subtopics()]
    missing = [s.value for s in missing_subtopics()]
    return {"ok": bool(registered) and not missing, "registered": registered, "missing": missing}
