from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from milestones.db import create_all
from milestones.settings import API_DEBUG, configure_logging, settings

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_all()
    yield


app = FastAPI(
    title="Recovery Milestones API",
    version="0.1.0",
    description="HTTP layer over the milestone calculator and recovery-circle roster.",
    debug=API_DEBUG,
    lifespan=lifespan,
)

# --- CORS ----------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

# --- Include Routers ----------------------------------------------------------
from .calculator import router as calculator_router
from .circle import router as circle_router

app.include_router(calculator_router)
app.include_router(circle_router)


# ---------- health-check ----------
@app.get("/")
def root():
    return {"status": "ok", "msg": "Milestones API is alive"}
