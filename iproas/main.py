# iproas/main.py
# -----------------------------------------------------------------------------
# FastAPI entrypoint
# - logging is configured on startup
# -----------------------------------------------------------------------------
from fastapi import FastAPI

from iproas.core.config import settings
from iproas.core.logging import setup_logging
from iproas.routers import chat, roas

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def on_startup():
    setup_logging()


app.include_router(roas.router)
app.include_router(chat.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
