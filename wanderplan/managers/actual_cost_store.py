# wanderplan/managers/actual_cost_store.py
"""
User-entered actual costs, kept across itinerary regenerations.

Entries are keyed by (day index, activity index). Positions alone are a poor
identity once an itinerary is regenerated with a different order or count,
so each key also carries a content fingerprint (day index plus normalised
activity name). On reseed a value follows its activity's fingerprint first
and only falls back to its old position when that activity is gone.

Every mutation builds a new mapping and swaps it in under a lock, so readers
always see a complete snapshot.
"""

from collections import Counter
from collections.abc import Mapping
from hashlib import blake2b
from math import isfinite
from threading import Lock
from types import MappingProxyType

from wanderplan.errors import InvalidActualCost, UnknownActivityError
from wanderplan.monitoring import get_logger
from wanderplan.schemas.budget import CostKey
from wanderplan.schemas.itinerary import GeneratedItinerary

logger = get_logger(__name__)


def activity_fingerprint(day_index: int, name: str, occurrence: int = 0) -> str:
    """
    Content-derived identity of an activity.

    Args:
        day_index: Zero-based day index.
        name: Activity name; case and surrounding/inner whitespace are ignored.
        occurrence: How many activities with the same name precede this one
            on the same day.

    Returns:
        A short hex digest.
    """
    normalized = " ".join(name.casefold().split())
    payload = f"{day_index}\x1f{normalized}\x1f{occurrence}".encode()
    return blake2b(payload, digest_size=8).hexdigest()


def itinerary_fingerprints(itinerary: GeneratedItinerary) -> dict[CostKey, str]:
    """Fingerprint every activity position of an itinerary."""
    fingerprints: dict[CostKey, str] = {}
    for day_index, day in enumerate(itinerary.itinerary):
        seen: Counter[str] = Counter()
        for activity_index, activity in enumerate(day.activities):
            normalized = " ".join(activity.name.casefold().split())
            fingerprints[day_index, activity_index] = activity_fingerprint(
                day_index,
                activity.name,
                seen[normalized],
            )
            seen[normalized] += 1
    return fingerprints


class ActualCostStore:
    """
    Mapping of (day index, activity index) to an entered actual cost.

    A ``None`` value means "nothing entered" and counts as 0 in budget totals.
    """

    __slots__ = ("_entries", "_fingerprints", "_lock")

    def __init__(self) -> None:
        self._entries: Mapping[CostKey, float | None] = MappingProxyType({})
        self._fingerprints: Mapping[CostKey, str] = MappingProxyType({})
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def snapshot(self) -> Mapping[CostKey, float | None]:
        """Return the current read-only mapping."""
        return self._entries

    def get(self, day_index: int, activity_index: int) -> float | None:
        """Return the entered cost at a position, ``None`` if nothing is entered."""
        return self._entries.get((day_index, activity_index))

    def set(self, day_index: int, activity_index: int, value: float | None) -> None:
        """
        Enter or clear the actual cost of one activity.

        Args:
            day_index: Zero-based day index.
            activity_index: Zero-based activity index within the day.
            value: Amount spent, or ``None`` to clear.

        Raises:
            UnknownActivityError: If no activity occupies that position.
            InvalidActualCost: If the value is negative or not finite.
        """
        if value is not None and (not isfinite(value) or value < 0):
            raise InvalidActualCost

        key = (day_index, activity_index)
        with self._lock:
            if key not in self._entries:
                raise UnknownActivityError(day_index, activity_index)
            entries = dict(self._entries)
            entries[key] = value
            self._entries = MappingProxyType(entries)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries = MappingProxyType({})
            self._fingerprints = MappingProxyType({})

    def reseed(self, itinerary: GeneratedItinerary) -> None:
        """
        Re-key the store for a freshly generated itinerary.

        For each activity of the new itinerary, in order of precedence:

        1. an entered value whose activity has the same fingerprint;
        2. the entered value at the same position, if that old activity does
           not reappear anywhere in the new itinerary;
        3. the activity's embedded ``actual_cost`` default, or ``None``.

        Entered values always win over the new defaults. Positions absent
        from the new itinerary are dropped.

        Args:
            itinerary: The new, validated itinerary.
        """
        new_fingerprints = itinerary_fingerprints(itinerary)
        surviving = set(new_fingerprints.values())

        with self._lock:
            old_entries = self._entries
            old_fingerprints = self._fingerprints
            by_fingerprint = {
                old_fingerprints[key]: value
                for key, value in old_entries.items()
                if value is not None and key in old_fingerprints
            }

            entries: dict[CostKey, float | None] = {}
            moved = carried = 0
            for day_index, day in enumerate(itinerary.itinerary):
                for activity_index, activity in enumerate(day.activities):
                    key = (day_index, activity_index)
                    fingerprint = new_fingerprints[key]
                    previous = old_entries.get(key)

                    if fingerprint in by_fingerprint:
                        value = by_fingerprint[fingerprint]
                        if old_fingerprints.get(key) != fingerprint:
                            moved += 1
                    elif previous is not None and old_fingerprints.get(key) not in surviving:
                        value = previous
                        carried += 1
                    else:
                        value = activity.actual_cost
                    entries[key] = value

            self._entries = MappingProxyType(entries)
            self._fingerprints = MappingProxyType(new_fingerprints)

        logger.info(
            "Actual cost store reseeded",
            activities=len(entries),
            moved_by_content=moved,
            carried_by_position=carried,
        )
        if carried:
            logger.warning(
                "Entered costs kept by position only; they may now belong to a different activity",
                count=carried,
            )
