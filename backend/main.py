from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import get_settings
from server.api import router as dashboard_router
import logging

logger = logging.getLogger("uvicorn.error")
settings = get_settings()
app = FastAPI(title="Data Dashboard", description="Upload a table, get charts and KPIs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount the dashboard API router
app.include_router(dashboard_router)
logger.info("Dataset store directory: %s", settings.data_dir)


@app.get("/health")
async def health():
    return {"ok": True}
