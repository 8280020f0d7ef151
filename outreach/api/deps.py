from typing import Optional

from fastapi import Depends

from outreach.core.rbac.exceptions import AuthenticationRequired
from outreach.core.rbac.principal import Principal
from outreach.core.security import get_optional_principal


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """Authenticated principal; 401 when the request carries none."""
    if principal is None:
        raise AuthenticationRequired("Could not validate credentials")
    return principal
