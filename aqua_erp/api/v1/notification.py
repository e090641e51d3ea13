from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db
from aqua_erp.logger_config import logger
from aqua_erp.schemas.notification import NotificationResponse
from aqua_erp.services.notification_service import NO_ALERTS_MESSAGE, NotificationService

router = APIRouter()


@router.get("/notifications", response_model=NotificationResponse, response_model_exclude_none=True)
def get_notifications(db: Session = Depends(get_db)):
    """
    Low stock alerts followed by overdue sales and buy credits.
    Credits past their return date are marked OVERDUE first.
    """
    try:
        messages = NotificationService(db).check_shortages_and_overdue_credits()
        if not messages:
            return NotificationResponse(message=NO_ALERTS_MESSAGE)
        return NotificationResponse(notifications=messages)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error fetching notifications: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch notifications")
