from fastapi import Depends, HTTPException, status
from elite_coach.core.dependencies import get_current_user
from elite_coach.models.profile import Profile, RoleEnum


def require_role(*allowed_roles: RoleEnum):
    """Dependency factory that lets through only the given roles."""
    async def role_checker(current_user: Profile = Depends(get_current_user)) -> Profile:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions"
            )
        return current_user
    return role_checker


require_coach = require_role(RoleEnum.coach)
