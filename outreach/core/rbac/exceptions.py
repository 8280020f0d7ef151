from fastapi import HTTPException, status


class PermissionDenied(HTTPException):
    """Raised when a gate denies the request"""

    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class AuthenticationRequired(HTTPException):
    """Raised when a route needs an authenticated principal"""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class RoleNotFound(HTTPException):
    """Raised when a role is not in the catalog"""

    def __init__(self, role: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Role '{role}' not found"
        )
