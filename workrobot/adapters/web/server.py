"""FastAPI application exposing the relay routes."""

from fastapi import FastAPI

from workrobot.adapters.web.routes import robot_router
from workrobot.config import __version__

app = FastAPI(title="Work Robot Relay", version=__version__)
app.include_router(robot_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
