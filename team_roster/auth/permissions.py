"""Authorization for roster management endpoints.

Identity lives outside this service: a signed JWT names the actor (``sub``)
and its ``role``. The roster only records the actor id on the rows it writes.
"""

import logging
from typing import Dict, List, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer
from jose import JWTError

from team_roster.auth.jwt import verify_token
from team_roster.models.enums import ActorRole
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)


class JWTBearer(HTTPBearer):
    """JWT handler accepting an HttpOnly ``access_token`` cookie or a bearer header."""
    
    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=False)
        self.require_token = auto_error

    async def __call__(self, request: Request) -> Optional[str]:
        access_token = request.cookies.get("access_token")
        if access_token:
            return access_token

        credentials = await super(JWTBearer, self).__call__(request)
        if credentials:
            return credentials.credentials

        if self.require_token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=get_message("auth", "authentication_required"),
            )
        
        return None


jwt_bearer = JWTBearer()


async def get_current_actor(token: str = Depends(jwt_bearer)) -> Dict:
    """Get the authenticated actor from the JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=get_message("auth", "invalid_credentials"),
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = verify_token(token)
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        raise credentials_exception

    actor_id = payload.get("sub")
    if not actor_id:
        raise credentials_exception

    return {
        "id": str(actor_id),
        "email": payload.get("email"),
        "role": payload.get("role"),
    }


def require_roles(required_roles: List[str]):
    """
    Dependency factory to require specific roles.
    
    Args:
        required_roles: List of role names that are allowed access
        
    Returns:
        Dependency function that checks the actor's role
    """
    async def _check_roles(
        current_actor: Dict = Depends(get_current_actor),
    ) -> Dict:
        actor_role = current_actor.get("role")
        
        if actor_role not in required_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=get_message("auth", "access_denied", roles=", ".join(required_roles), role=actor_role),
            )
        
        return current_actor
    
    return _check_roles


# Editors manage content; only administrators may remove members
roster_editor_required = require_roles(
    [ActorRole.ADMIN.value, ActorRole.EDITOR.value, ActorRole.SUPER_ADMIN.value]
)
roster_admin_required = require_roles([ActorRole.ADMIN.value, ActorRole.SUPER_ADMIN.value])
