"""Tagged result of a cart operation."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from storefront.errors import RemoteOperationFailed


class OperationStatus(str, Enum):
    """Lifecycle phase of a cart operation."""
    PENDING = "pending"
    OK = "ok"
    ERR = "err"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one cart operation.

    ``Pending`` is what observers see while the remote call is in flight;
    awaiting an operation always yields ``Ok`` or ``Err``.
    """
    operation: str
    status: OperationStatus
    value: Any = None
    error: Optional[RemoteOperationFailed] = None

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.OK

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

    def is_terminal(self) -> bool:
        """Check if the operation has settled."""
        return self.status in (OperationStatus.OK, OperationStatus.ERR)

    def unwrap(self) -> Any:
        """Return the value, or raise the failure this result carries."""
        if self.status is OperationStatus.ERR:
            raise self.error
        if self.status is OperationStatus.PENDING:
            raise RuntimeError(f"{self.operation} has not settled yet")
        return self.value


def Pending(operation: str) -> OperationResult:
    return OperationResult(operation, OperationStatus.PENDING)


def Ok(operation: str, value: Any = None) -> OperationResult:
    return OperationResult(operation, OperationStatus.OK, value=value)


def Err(operation: str, error: RemoteOperationFailed) -> OperationResult:
    return OperationResult(operation, OperationStatus.ERR, error=error)
