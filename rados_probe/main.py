from fastapi import FastAPI

from .api import health, rados

app = FastAPI(title="RADOS Latency Probe")

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(rados.router, prefix="/rados", tags=["rados"])
