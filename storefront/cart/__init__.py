"""Cart package: models, remote service adapters, and the observable store."""
from .models import CartItem, CartState, compute_total
from .result import Err, Ok, OperationResult, OperationStatus, Pending
from .service import RemoteCartService
from .http import HttpCartService
from .memory import InMemoryCartService
from .store import CartStore

__all__ = [
    "CartItem",
    "CartState",
    "compute_total",
    "OperationResult",
    "OperationStatus",
    "Pending",
    "Ok",
    "Err",
    "RemoteCartService",
    "HttpCartService",
    "InMemoryCartService",
    "CartStore",
]
