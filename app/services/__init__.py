from app.services.auth import AuthService, auth_service
from app.services.ordering import OrderingGateway, OrderValidationError, ScopeNotFoundError

__all__ = [
    "AuthService",
    "auth_service",
    "OrderingGateway",
    "OrderValidationError",
    "ScopeNotFoundError",
]
