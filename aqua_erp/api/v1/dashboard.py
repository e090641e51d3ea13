from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db
from aqua_erp.logger_config import logger
from aqua_erp.schemas.dashboard import DashboardResponse
from aqua_erp.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db)):
    try:
        return DashboardService(db).get_dashboard_data()
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error building dashboard: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch dashboard data")
