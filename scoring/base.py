"""Base band scorer abstract class."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from common.logger import get_logger


@dataclass(frozen=True)
class BandContext:
    """Inputs shared by every band for one scoring pass."""
    price: float
    rsi: float
    ema_long: float
    fear_greed: float
    current_alloc: float
    target_alloc: float


@dataclass(frozen=True)
class BandScore:
    points: int
    reason: Optional[str] = None


class BaseBand(ABC):
    name: str = ""
    max_points: int = 0

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def evaluate(self, ctx: BandContext) -> BandScore:
        """Return points in [0, max_points] and at most one reason."""
        pass
