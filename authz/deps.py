from fastapi import Depends
from auth.services.auth_service import get_current_active_user
from core.errors import Forbidden
from user.models import User

def require_admin(user: User = Depends(get_current_active_user)) -> User:
    if not user.is_admin:
        raise Forbidden("Access denied. Admin privileges required.")
    return user
