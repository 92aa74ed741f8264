"""Linear undo/redo history over full order-list snapshots.

The history is a tuple of snapshots plus a cursor. Recording a new snapshot
after one or more undos drops everything past the cursor, so there is only
ever one redo branch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from momo_order.models import Order

Snapshot = tuple[Order, ...]


@dataclass(frozen=True)
class OrderHistoryState:
    """Immutable snapshot log with the cursor on the visible list."""

    snapshots: tuple[Snapshot, ...]
    current_index: int = 0

    def __post_init__(self) -> None:
        if not self.snapshots:
            raise ValueError("history needs at least one snapshot")
        if not (0 <= self.current_index < len(self.snapshots)):
            raise ValueError(
                f"current_index {self.current_index} outside 0..{len(self.snapshots) - 1}"
            )


def initial_history(orders: Iterable[Order] = ()) -> OrderHistoryState:
    """Seed the history with whatever was restored at load time."""
    return OrderHistoryState(snapshots=(tuple(orders),), current_index=0)


def current_orders(state: OrderHistoryState) -> Snapshot:
    return state.snapshots[state.current_index]


def record(state: OrderHistoryState, new_orders: Iterable[Order]) -> OrderHistoryState:
    """Append a snapshot after the cursor, discarding any redo branch."""
    kept = state.snapshots[: state.current_index + 1]
    snapshots = kept + (tuple(new_orders),)
    return OrderHistoryState(snapshots=snapshots, current_index=len(snapshots) - 1)


def can_undo(state: OrderHistoryState) -> bool:
    return state.current_index > 0


def can_redo(state: OrderHistoryState) -> bool:
    return state.current_index < len(state.snapshots) - 1


def undo(state: OrderHistoryState) -> OrderHistoryState:
    if not can_undo(state):
        return state
    return OrderHistoryState(snapshots=state.snapshots, current_index=state.current_index - 1)


def redo(state: OrderHistoryState) -> OrderHistoryState:
    if not can_redo(state):
        return state
    return OrderHistoryState(snapshots=state.snapshots, current_index=state.current_index + 1)
