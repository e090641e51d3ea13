from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional, List
from aqua_erp.common.exceptions import AuthError, NotFoundError, ValidationError
from aqua_erp.models.user import User, UserRole
from aqua_erp.core.security import get_password_hash, verify_password
from aqua_erp.logger_config import logger


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    """Get user by database ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email."""
    return db.query(User).filter(User.email == email.lower()).first()


def get_all_users(
    db: Session,
    role: Optional[UserRole] = None,
    search: Optional[str] = None
) -> List[User]:
    """Get all active users with optional filtering."""
    query = db.query(User).filter(User.is_active.is_(True))

    if role:
        query = query.filter(User.role == role)

    if search:
        search_term = f"%{search}%"
        query = query.filter(
            (User.name.ilike(search_term)) |
            (User.email.ilike(search_term))
        )

    return query.order_by(User.id.asc()).all()


def create_user(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: UserRole,
    phone: Optional[str] = None,
) -> User:
    """Create a new user."""
    if get_user_by_email(db, email):
        raise ValidationError("User already exist")

    user = User(
        email=email.lower(),
        password_hash=get_password_hash(password),
        name=name,
        phone=phone,
        role=role,
        is_active=True,
    )
    db.add(user)

    try:
        db.commit()
        db.refresh(user)
        logger.info(f"User {user.email} created with role {role.value}")
        return user
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating user: {str(e)}")
        raise ValidationError("Failed to create user. Email may already exist.")


def authenticate_user(db: Session, email: str, password: str, role: UserRole) -> Optional[User]:
    """Return the active user matching email + role + password, else None."""
    user = db.query(User).filter(
        User.email == email.lower(),
        User.role == role,
        User.is_active.is_(True)
    ).first()

    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def update_profile(
    db: Session,
    user: User,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    current_password: Optional[str] = None,
    new_password: Optional[str] = None,
) -> User:
    if name is not None:
        user.name = name
    if phone is not None:
        user.phone = phone

    if new_password:
        if not current_password or not verify_password(current_password, user.password_hash):
            raise AuthError("Current password is incorrect")
        user.password_hash = get_password_hash(new_password)

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    """Soft delete a user."""
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    user.is_active = False
    db.commit()
    logger.info(f"User {user_id} deactivated")
