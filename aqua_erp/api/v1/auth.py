from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from aqua_erp.common.exceptions import AppError
from aqua_erp.core.config import settings
from aqua_erp.core.dependencies import get_current_active_user, get_db
from aqua_erp.core.security import create_access_token
from aqua_erp.logger_config import logger
from aqua_erp.models.user import User
from aqua_erp.schemas.auth import LoginRequest, LoginResponse, Logout
from aqua_erp.schemas.user import ProfileUpdate, UserResponse
from aqua_erp.services.user_service import authenticate_user, update_profile

router = APIRouter()


def _cookie_options() -> dict:
    if settings.is_production:
        return {"httponly": True, "secure": True, "samesite": "none"}
    return {"httponly": True, "secure": False, "samesite": "lax"}


@router.post("/login", response_model=LoginResponse)
def login(
    login_data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Authenticate user for the requested role, set the `token` cookie and
    return the JWT in the body as well.
    """
    try:
        logger.info(f"Login attempt for email: {login_data.email} as {login_data.role.value}")

        user = authenticate_user(db, login_data.email, login_data.password, login_data.role)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email, password or role"
            )

        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(
            data={"sub": str(user.id), "role": user.role.value},
            expires_delta=access_token_expires
        )

        response.set_cookie(
            key=settings.COOKIE_NAME,
            value=access_token,
            max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            **_cookie_options()
        )

        logger.info(f"User {user.email} logged in successfully")

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            user=UserResponse.model_validate(user)
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during login: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred during login"
        )


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_active_user)):
    return current_user


@router.put("/update", response_model=UserResponse)
def update_me(
    update_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update own name/phone; changing the password needs the current one."""
    try:
        user = update_profile(
            db,
            current_user,
            name=update_data.name,
            phone=update_data.phone,
            current_password=update_data.current_password,
            new_password=update_data.new_password,
        )
        logger.info(f"User {user.email} updated their profile")
        return user
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error updating profile: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while updating the profile"
        )


@router.post("/logout", response_model=Logout)
def logout(response: Response):
    """
    logout the user
    """
    response.delete_cookie(key=settings.COOKIE_NAME, **_cookie_options())
    logger.info("User Logged out")
    return Logout(
        message="Logged out Successfully"
    )
