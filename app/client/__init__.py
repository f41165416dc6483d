from app.client.errors import (
    OrderGatewayError,
    OrderRejected,
    TransientFailure,
    Unauthorized,
    ValidationFailed,
)
from app.client.gateway import Confirmed, OrderGatewayClient
from app.client.state import OrderState
from app.client.views import (
    CollectionView,
    DocumentCollectionView,
    LinkCollectionView,
    MoveOutcome,
    Notification,
    NoticeCollectionView,
)

__all__ = [
    "OrderGatewayError",
    "OrderRejected",
    "TransientFailure",
    "Unauthorized",
    "ValidationFailed",
    "Confirmed",
    "OrderGatewayClient",
    "OrderState",
    "CollectionView",
    "DocumentCollectionView",
    "LinkCollectionView",
    "MoveOutcome",
    "Notification",
    "NoticeCollectionView",
]
