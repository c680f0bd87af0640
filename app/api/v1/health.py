"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.envelope import ApiResponse
from app.schemas.health import HealthOut

router = APIRouter()


@router.get("/", response_model=ApiResponse[HealthOut])
def get_health(db: Session = Depends(get_db)) -> ApiResponse[HealthOut]:
    """
    Report service and database status. Used by load balancers and monitoring;
    does not require authentication. Always 200 so probes can read the body.
    """
    connected = check_db_connected(db)
    return ApiResponse[HealthOut](
        data=HealthOut(
            status="ok" if connected else "degraded",
            environment=settings.APP_ENV,
            database="connected" if connected else "disconnected",
            version=settings.APP_VERSION,
        )
    )
