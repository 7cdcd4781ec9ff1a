"""Abstract base class for fraud detection rules."""

from abc import ABC, abstractmethod

from ..config import PaymentsConfig, default_config
from ..models import ChargeRequest


class FraudRule(ABC):
    """Base class for all fraud rules.

    A rule is a named, weighted predicate over a charge request. Thresholds
    are read from the config the rule is bound to, so the same rule class can
    be reused with tuned values.
    """

    rule_name: str

    def __init__(self, config: PaymentsConfig | None = None) -> None:
        self._config = config or default_config

    @property
    @abstractmethod
    def weight(self) -> float:
        """Score contribution when the rule triggers, in (0, 1]."""
        ...

    @abstractmethod
    def evaluate(self, request: ChargeRequest) -> bool:
        """Return True when the rule triggers for ``request``."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule_name={self.rule_name!r}, weight={self.weight})"
