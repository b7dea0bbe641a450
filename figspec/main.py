from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.settings import configure_logging, get_settings
from .routes.chart import router as chart_router

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="figspec Chart Spec API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chart_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
