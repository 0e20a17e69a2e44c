import logging

from fastapi import Depends, HTTPException, status

from quickcreate.auth.dependencies import get_current_user
from quickcreate.auth.schemas import CurrentUser

logger = logging.getLogger(__name__)


def check_permission(module: str, action: str):
    """
    Dependency factory to enforce a specific permission.

    Example:
        Depends(check_permission("accounts", "create"))
    """

    async def _checker(current_user: CurrentUser = Depends(get_current_user)) -> None:
        if not current_user.can(module, action):
            logger.info(
                "Permission denied",
                extra={"user_id": current_user.id, "permission_module": module, "permission_action": action},
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )

    return _checker
