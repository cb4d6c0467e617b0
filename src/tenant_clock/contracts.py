"""Value types shared by range resolution and day boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from tenant_clock.errors import InvalidRangeError
from tenant_clock.time_utils import InstantLike, coerce_instant, iso_z, to_epoch_ms


@dataclass(frozen=True)
class DateRange:
    """Inclusive UTC query window ``[start, end]``."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        start = coerce_instant(self.start)
        end = coerce_instant(self.end)
        if start > end:
            raise InvalidRangeError(f"range ends before it starts: {iso_z(start)} > {iso_z(end)}")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: InstantLike) -> bool:
        value = coerce_instant(instant)
        return self.start <= value <= self.end

    def to_epoch_ms(self) -> tuple[int, int]:
        return to_epoch_ms(self.start), to_epoch_ms(self.end)

    def to_dict(self) -> dict[str, Any]:
        return {"start": iso_z(self.start), "end": iso_z(self.end)}


@dataclass(frozen=True)
class CustomRange:
    """Caller-picked bounds for the ``custom`` preset; either side may be unset."""

    from_: InstantLike | None = None
    to: InstantLike | None = None

    @property
    def is_complete(self) -> bool:
        return self.from_ is not None and self.to is not None
