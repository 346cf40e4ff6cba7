"""HTTP entry point — mounts the strip router.

Run with: uvicorn src.api.app:app
"""
from fastapi import FastAPI

from src.api.strip_api import router as strip_router

app = FastAPI(title="blankdown", version="0.1.0")

app.include_router(strip_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
