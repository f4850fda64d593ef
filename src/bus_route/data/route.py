"""
Route structure for the Bus Route Simulator.

A route is a cyclic sequence of stops with a distinguished head. Stops are
kept in an index-based arena: a growable slot table plus ``next``/``prev``
arrays of slot indices. Removed slots are recycled through a free list;
stop identities are never recycled. An id -> slot map locates any stop
handed out by a lookup in constant time.

Policies kept on purpose:
- ``insert_after`` with a missing target appends at the end.
- ``insert_at_position`` clamps positions past the length to the end.
- ``delete_by_name`` leaves the predecessor's leg weights unchanged, so the
  predecessor's ``dist_to_next``/``time_to_next`` now describe the leg to
  the new successor.
"""

from typing import Dict, Iterator, List, Optional

import structlog

from .models import Stop

logger = structlog.get_logger(__name__)

_NIL = -1


class Route:
    """Cyclic, head-anchored sequence of stops stored in an arena."""

    def __init__(self):
        self._slots: List[Optional[Stop]] = []
        self._next: List[int] = []
        self._prev: List[int] = []
        self._free: List[int] = []
        self._slot_of: Dict[int, int] = {}
        self._head: int = _NIL

    # ------------------------------------------------------------------
    # size and traversal
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._slot_of)

    @property
    def size(self) -> int:
        return len(self._slot_of)

    @property
    def is_empty(self) -> bool:
        return self._head == _NIL

    def __contains__(self, stop: object) -> bool:
        return isinstance(stop, Stop) and self._locate(stop) != _NIL

    def __iter__(self) -> Iterator[Stop]:
        """Iterate head-forward over one full lap."""
        if self._head == _NIL:
            return
        yield from self._lap(self._head)

    def __repr__(self) -> str:
        return f"Route({' -> '.join(self.names())})"

    @property
    def head(self) -> Optional[Stop]:
        if self._head == _NIL:
            return None
        return self._slots[self._head]

    @property
    def tail(self) -> Optional[Stop]:
        if self._head == _NIL:
            return None
        return self._slots[self._prev[self._head]]

    def successor(self, stop: Stop) -> Optional[Stop]:
        """Stop after ``stop``, or None if ``stop`` is not on this route."""
        slot = self._locate(stop)
        if slot == _NIL:
            return None
        return self._slots[self._next[slot]]

    def predecessor(self, stop: Stop) -> Optional[Stop]:
        """Stop before ``stop``, or None if ``stop`` is not on this route."""
        slot = self._locate(stop)
        if slot == _NIL:
            return None
        return self._slots[self._prev[slot]]

    def walk_from(self, stop: Stop) -> Iterator[Stop]:
        """One full lap starting at ``stop``; empty if it is not on the route."""
        slot = self._locate(stop)
        if slot == _NIL:
            return iter(())
        return self._lap(slot)

    def position_of(self, stop: Stop) -> Optional[int]:
        """1-based position counted from the head."""
        for position, current in enumerate(self, start=1):
            if current.id == stop.id:
                return position
        return None

    def names(self) -> List[str]:
        return [stop.name for stop in self]

    # ------------------------------------------------------------------
    # lookup
    # ------------------------------------------------------------------

    def find_by_name(self, name: str) -> Optional[Stop]:
        """First stop whose name matches ``name`` ignoring ASCII case."""
        for stop in self:
            if stop.matches_name(name):
                return stop
        return None

    def find_by_id(self, stop_id: int) -> Optional[Stop]:
        """First stop with identity ``stop_id`` in head-forward order."""
        for stop in self:
            if stop.id == stop_id:
                return stop
        return None

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def insert_end(self, stop: Stop) -> Stop:
        """Append ``stop`` after the tail; an empty route gets a self-cycle."""
        slot = self._allocate(stop)
        if self._head == _NIL:
            self._make_sole(slot)
        else:
            self._link_after(self._prev[self._head], slot)
        logger.debug("stop_inserted", mode="end", stop_id=stop.id, name=stop.name)
        return stop

    def insert_after(self, existing: Optional[Stop], new_stop: Stop) -> Stop:
        """Splice ``new_stop`` right after ``existing``.

        A missing or foreign ``existing`` falls back to ``insert_end``.
        """
        anchor = self._locate(existing) if existing is not None else _NIL
        if anchor == _NIL:
            logger.debug("insert_after_fallback", stop_id=new_stop.id)
            return self.insert_end(new_stop)
        slot = self._allocate(new_stop)
        self._link_after(anchor, slot)
        logger.debug(
            "stop_inserted", mode="after", stop_id=new_stop.id, after_id=existing.id
        )
        return new_stop

    def insert_at_position(self, new_stop: Stop, pos: int) -> Stop:
        """Insert ``new_stop`` so it ends up at 1-based position ``pos``.

        ``pos <= 1`` and the empty route share one path: the new stop becomes
        head. Positions past the length clamp to the end of the lap.
        """
        if self._head == _NIL or pos <= 1:
            slot = self._allocate(new_stop)
            if self._head == _NIL:
                self._make_sole(slot)
            else:
                self._link_after(self._prev[self._head], slot)
                self._head = slot
            logger.debug("stop_inserted", mode="head", stop_id=new_stop.id)
            return new_stop

        current = self._head
        index = 1
        while self._next[current] != self._head and index < pos - 1:
            current = self._next[current]
            index += 1
        slot = self._allocate(new_stop)
        self._link_after(current, slot)
        logger.debug(
            "stop_inserted", mode="position", stop_id=new_stop.id, position=index + 1
        )
        return new_stop

    def delete_by_name(self, name: str) -> bool:
        """Remove the first stop matching ``name``; False if none matched."""
        target = self.find_by_name(name)
        if target is None:
            return False
        self._remove(self._slot_of[target.id])
        logger.debug("stop_deleted", stop_id=target.id, name=target.name)
        return True

    def clear(self) -> None:
        """Release every stop; the route becomes empty."""
        released = len(self._slot_of)
        self._slots.clear()
        self._next.clear()
        self._prev.clear()
        self._free.clear()
        self._slot_of.clear()
        self._head = _NIL
        if released:
            logger.debug("route_cleared", released=released)

    # ------------------------------------------------------------------
    # arena internals
    # ------------------------------------------------------------------

    def _locate(self, stop: Optional[Stop]) -> int:
        if stop is None:
            return _NIL
        slot = self._slot_of.get(stop.id, _NIL)
        if slot == _NIL or self._slots[slot] != stop:
            return _NIL
        return slot

    def _allocate(self, stop: Stop) -> int:
        if stop.id in self._slot_of:
            raise ValueError(f"stop id {stop.id} is already on the route")
        if self._free:
            slot = self._free.pop()
            self._slots[slot] = stop
            self._next[slot] = slot
            self._prev[slot] = slot
        else:
            slot = len(self._slots)
            self._slots.append(stop)
            self._next.append(slot)
            self._prev.append(slot)
        self._slot_of[stop.id] = slot
        return slot

    def _make_sole(self, slot: int) -> None:
        self._next[slot] = slot
        self._prev[slot] = slot
        self._head = slot

    def _link_after(self, anchor: int, slot: int) -> None:
        following = self._next[anchor]
        self._next[anchor] = slot
        self._prev[slot] = anchor
        self._next[slot] = following
        self._prev[following] = slot

    def _remove(self, slot: int) -> None:
        stop = self._slots[slot]
        if self._next[slot] == slot:
            self._head = _NIL
        else:
            before, after = self._prev[slot], self._next[slot]
            self._next[before] = after
            self._prev[after] = before
            if slot == self._head:
                self._head = after
        del self._slot_of[stop.id]
        self._slots[slot] = None
        self._next[slot] = _NIL
        self._prev[slot] = _NIL
        self._free.append(slot)

    def _lap(self, start: int) -> Iterator[Stop]:
        current = start
        while True:
            yield self._slots[current]
            current = self._next[current]
            if current == start:
                break


__all__ = ["Route"]
