"""
Domain exceptions for Council Portal.

Exception hierarchy:
    PortalError
    ├── AuthorizationError
    │   ├── AuthenticationRequiredError
    │   └── PermissionDeniedError
    ├── NotFoundError
    ├── ValidationError
    └── SnapshotFormatError

Messages are shown to end users as-is, so they are localized.

Responsibility: Shared error taxonomy for services and API layer
"""

from typing import Optional


class PortalError(Exception):
    """Base exception for all Council Portal errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthorizationError(PortalError):
    """Caller is absent or insufficiently privileged"""
    pass


class AuthenticationRequiredError(AuthorizationError):
    """No authenticated caller"""

    def __init__(self, message: str = "認証が必要です"):
        super().__init__(message)


class PermissionDeniedError(AuthorizationError):
    """Authenticated caller lacks the required role"""

    def __init__(self, message: str = "管理者権限が必要です", required_role: Optional[str] = None):
        super().__init__(message)
        self.required_role = required_role


class NotFoundError(PortalError):
    """Referenced record does not exist"""

    def __init__(self, entity: str, entity_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__(message or f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(PortalError):
    """Request data failed a domain rule"""
    pass


class SnapshotFormatError(PortalError):
    """Import payload is not a usable export snapshot"""
    pass
