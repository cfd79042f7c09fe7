"""
Market state abstraction layer.

Holds the current curve snapshot for each named curve (e.g. "USD_SOFR")
and replaces snapshots wholesale when quotes are edited or the
interpolation policy changes.

Curves are immutable, so readers take a reference and query it without
locking. Writers build the replacement curve and swap the reference under
a single lock, so a reader sees either the old or the new point set,
never a mix. A failed rebuild leaves the previous snapshot in place.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import logging
import threading

from .curves.curve import Curve
from .curves.interpolation import DEFAULT_POLICY, InterpolationPolicy
from .curves.points import QuoteLike
from .dates import DateUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveState:
    """
    One named curve snapshot.

    Attributes:
        name: Curve identifier (e.g. "USD_SOFR")
        curve: Immutable curve
        version: Incremented on every replacement
        metadata: Free-form curve metadata (index name, source, ...)
    """
    name: str
    curve: Curve
    version: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def valuation_date(self) -> date:
        return self.curve.valuation_date

    @property
    def policy(self) -> InterpolationPolicy:
        return self.curve.policy

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "version": self.version,
            "valuation_date": self.valuation_date.isoformat(),
            "policy": self.policy.value,
            "points": [p.to_dict() for p in self.curve.points],
            "metadata": dict(self.metadata),
        }


class MarketState:
    """
    Thread-safe registry of curve snapshots.

    Single writer, many readers: all replacements go through one lock;
    reads return the current immutable CurveState.
    """

    def __init__(self, valuation_date: Optional[date] = None):
        self.valuation_date = DateUtils.to_date(valuation_date or date.today())
        self._states: Dict[str, CurveState] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: str) -> bool:
        return name in self._states

    def list_curves(self) -> List[str]:
        """Names of all curves held."""
        return sorted(self._states)

    def get(self, name: str) -> CurveState:
        """
        Current snapshot for a curve.

        Raises:
            KeyError: If no curve with that name is held
        """
        try:
            return self._states[name]
        except KeyError:
            raise KeyError(f"Unknown curve: {name}") from None

    def curve(self, name: str) -> Curve:
        """Current Curve for a name."""
        return self.get(name).curve

    def _swap(self, name: str, curve: Curve, metadata: Optional[Dict[str, Any]] = None) -> CurveState:
        with self._lock:
            previous = self._states.get(name)
            version = previous.version + 1 if previous else 0
            if metadata is None:
                metadata = dict(previous.metadata) if previous else {}
            state = CurveState(name=name, curve=curve, version=version, metadata=metadata)
            # Rebinding a dict slot is atomic for readers
            self._states[name] = state
        logger.info(
            "Curve %s replaced: version=%d points=%d policy=%s",
            name, version, len(curve), curve.policy.value,
        )
        return state

    def load(
        self,
        name: str,
        quotes: Iterable[QuoteLike],
        policy: Union[str, InterpolationPolicy] = DEFAULT_POLICY,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> CurveState:
        """
        Build a curve from quotes and install it under a name.

        Raises:
            DuplicateTenorError: If two quotes share a day offset
        """
        curve = Curve(quotes, policy=policy, valuation_date=self.valuation_date)
        return self._swap(name, curve, metadata)

    def rebuild(self, name: str, rebuild: Callable[[Curve], Curve]) -> CurveState:
        """
        Replace a curve with rebuild(current curve).

        The function runs under the write lock against the snapshot current
        at that moment. If it raises, the snapshot is left in place.
        """
        with self._lock:
            current = self.get(name)
            curve = rebuild(current.curve)
            state = CurveState(
                name=name, curve=curve, version=current.version + 1,
                metadata=dict(current.metadata),
            )
            self._states[name] = state
        logger.info(
            "Curve %s rebuilt: version=%d points=%d policy=%s",
            name, state.version, len(curve), curve.policy.value,
        )
        return state

    def update_rate(self, name: str, tenor: str, rate: float) -> CurveState:
        """
        Edit one quoted rate; the curve is rebuilt wholesale.

        Raises:
            KeyError: If the curve or tenor is unknown
        """
        return self.rebuild(name, lambda curve: curve.with_rate(tenor, rate))

    def replace_quotes(self, name: str, quotes: Iterable[QuoteLike]) -> CurveState:
        """Replace all quotes of a curve, keeping its policy."""
        quotes = list(quotes)
        return self.rebuild(name, lambda curve: curve.with_quotes(quotes))

    def set_policy(self, name: str, policy: Union[str, InterpolationPolicy]) -> CurveState:
        """Switch a curve's interpolation policy."""
        return self.rebuild(name, lambda curve: curve.with_policy(policy))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        states = dict(self._states)
        return {
            "valuation_date": self.valuation_date.isoformat(),
            "curves": {name: state.to_dict() for name, state in sorted(states.items())},
        }


__all__ = [
    "CurveState",
    "MarketState",
]
