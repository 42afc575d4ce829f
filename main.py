import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config

# Routers
from routers.admin import router as admin_router
from routers.health import router as health_router
from routers.marking import router as marking_router
from routers.questions import router as questions_router

logger = logging.getLogger("python-quiz")
logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title="Python Quiz – Question Engine API")

# Allow calls from the quiz front-end dev servers
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(marking_router)  # /evaluate, /mark, /mark-batch
app.include_router(questions_router)  # /subtopics, /questions, /questions/generate
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
