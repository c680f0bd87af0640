"""Health payload for the unauthenticated /health route."""

from typing import Literal

from app.schemas.envelope import ApiModel


class HealthOut(ApiModel):
    """Service liveness; `status` is degraded while the database is unreachable."""

    status: Literal["ok", "degraded"]
    environment: str
    database: Literal["connected", "disconnected"]
    version: str
