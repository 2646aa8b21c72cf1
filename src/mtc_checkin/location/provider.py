from __future__ import annotations

from typing import Callable, Protocol

from ..core.enums import PositionErrorCode
from .model import PositionOptions

SuccessCallback = Callable[[float, float], None]
ErrorCallback = Callable[[PositionErrorCode, str], None]


class GeolocationProvider(Protocol):
    """Device positioning capability.

    Callbacks must be invoked on the event loop thread that registered them.
    """

    def is_available(self) -> bool:
        raise NotImplementedError

    def get_current_position(self, on_success: SuccessCallback, on_error: ErrorCallback, options: PositionOptions) -> None:
        raise NotImplementedError

    def watch_position(self, on_success: SuccessCallback, on_error: ErrorCallback, options: PositionOptions) -> int:
        raise NotImplementedError

    def clear_watch(self, watch_id: int) -> None:
        raise NotImplementedError
