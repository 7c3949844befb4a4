from __future__ import annotations

from pydantic import BaseModel


# === API Schemas ===


class BuildInfo(BaseModel):
    type: str
    baseImage: str
    source: str


class WelcomeResponse(BaseModel):
    message: str
    status: str = "success"
    timestamp: str
    buildInfo: BuildInfo


class HealthResponse(BaseModel):
    status: str = "healthy"
    uptime: float
    timestamp: str


class MemoryUsage(BaseModel):
    rss: int
    maxRss: int
    heapBlocks: int


class InfoResponse(BaseModel):
    nodeVersion: str
    platform: str
    arch: str
    memory: MemoryUsage
    environment: str


class ErrorResponse(BaseModel):
    error: str
    message: str
