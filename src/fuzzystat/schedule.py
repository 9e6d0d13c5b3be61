from __future__ import annotations
import re, uuid, datetime as dt
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional
from fuzzystat.exceptions import InvalidScheduleEntry

_HHMM = re.compile(r'^([01][0-9]|2[0-3]):[0-5][0-9]$')

@dataclass(frozen=True)
class ScheduleEntry:
    id: str
    name: str
    time: str            # 'HH:MM' 24h
    temperature: float

def validate_time(text: str) -> str:
    if not isinstance(text, str) or not _HHMM.match(text):
        raise InvalidScheduleEntry(f"time must be 'HH:MM' (00:00-23:59), got {text!r}")
    return text

class Schedule:
    """
    Session-scoped, insertion-ordered collection of schedule entries keyed by id.
    Times are checked here, on the way in; the resolver trusts them.
    """
    def __init__(self, entries: Iterable[ScheduleEntry] = ()):
        self._entries: List[ScheduleEntry] = []
        for e in entries:
            self._insert(e)

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def entries(self) -> List[ScheduleEntry]:
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[ScheduleEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def add(self, name: str, time: str, temperature: float) -> ScheduleEntry:
        entry = ScheduleEntry(id=uuid.uuid4().hex, name=str(name), time=validate_time(time),
                              temperature=float(temperature))
        self._entries.append(entry)
        return entry

    def update(self, entry: ScheduleEntry) -> ScheduleEntry:
        validate_time(entry.time)
        for i, e in enumerate(self._entries):
            if e.id == entry.id:
                self._entries[i] = replace(entry, temperature=float(entry.temperature))
                return self._entries[i]
        raise InvalidScheduleEntry(f"unknown schedule entry {entry.id!r}")

    def delete(self, entry_id: str) -> Optional[ScheduleEntry]:
        e = self.get(entry_id)
        if e is not None:
            self._entries.remove(e)
        return e

    def clear(self) -> None:
        self._entries.clear()

    def _insert(self, entry: ScheduleEntry) -> None:
        validate_time(entry.time)
        if self.get(entry.id) is not None:
            raise InvalidScheduleEntry(f"duplicate schedule entry id {entry.id!r}")
        self._entries.append(entry)

def resolve_active(entries: Iterable[ScheduleEntry], now_hm: str) -> Optional[ScheduleEntry]:
    """
    Pick the entry in effect at now_hm ('HH:MM'). Before the earliest entry of
    the day the last entry still holds, carried over from the previous evening.
    """
    evs = sorted(entries, key=lambda E: E.time)  # stable for equal times
    if not evs:
        return None
    # pick the last event whose time <= now
    last = None
    for e in evs:
        if e.time <= now_hm:
            last = e
        else:
            break
    if last is None:
        # wrap to yesterday's last event
        last = evs[-1]
    return last

def active_at(entries: Iterable[ScheduleEntry], when: dt.datetime) -> Optional[ScheduleEntry]:
    return resolve_active(entries, when.strftime('%H:%M'))
