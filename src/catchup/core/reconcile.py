"""Reconciliation of the current playlist against its canonical form.

Works out what has to change, as a list of intents for a sink to apply.
Nothing here talks to YouTube.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .entries import Entry
from .ordering import is_canonical, sort_entries
from .pruning import Decision, kept, prune_entries

logger = logging.getLogger(__name__)


class ActionKind(Enum):
    """What happens to an entry."""

    KEEP = "keep"
    REORDER = "reorder"
    REMOVE = "remove"


class IntentKind(Enum):
    """A mutation to apply to the playlist."""

    SET_POSITION = "set_position"
    DELETE = "delete"


@dataclass(frozen=True)
class Action:
    """Report line for one entry."""

    entry_id: str
    kind: ActionKind
    position: int | None = None
    reason: str | None = None
    title: str = ""

    def describe(self) -> str:
        match self.kind:
            case ActionKind.REORDER:
                return f"move to {self.position}"
            case ActionKind.REMOVE:
                return f"remove ({self.reason})"
            case _:
                return "keep"


@dataclass(frozen=True)
class Intent:
    """A single idempotent mutation against the playlist."""

    kind: IntentKind
    entry_id: str
    position: int | None = None


@dataclass
class Report:
    """Outcome of a reconciliation run."""

    actions: list[Action] = field(default_factory=list)
    intents: list[Intent] = field(default_factory=list)
    in_order: bool = True

    @property
    def changed(self) -> bool:
        return bool(self.intents)

    def removals(self) -> list[Action]:
        return [a for a in self.actions if a.kind == ActionKind.REMOVE]

    def reorders(self) -> list[Action]:
        return [a for a in self.actions if a.kind == ActionKind.REORDER]

    def to_dict(self) -> dict:
        return {
            "changed": self.changed,
            "in_order": self.in_order,
            "actions": [
                {
                    "entry_id": a.entry_id,
                    "title": a.title,
                    "action": a.kind.value,
                    "position": a.position,
                    "reason": a.reason,
                }
                for a in self.actions
            ],
        }


def reconcile(
    current: list[Entry],
    max_retained: int | None = None,
    reorder: bool = True,
) -> Report:
    """
    Compare the playlist as found with its canonical order.

    With `max_retained` set, entries are also pruned and every removal becomes
    a delete intent. Removed entries take no part in reordering. Kept entries
    are only repositioned when their order differs from the canonical one; in
    that case every kept entry gets a set-position intent with its zero-based
    index among the kept entries. With `reorder` off only deletions are made.

    Intents are ordered so that applying them one after another leaves the
    playlist in canonical order: deletes first, then positions ascending.
    """
    canonical = sort_entries(current)
    if max_retained is None:
        decisions = [Decision(entry=e) for e in canonical]
    else:
        decisions = prune_entries(canonical, max_retained)

    survivors = kept(decisions)
    survivor_ids = {e.entry_id for e in survivors}
    in_order = is_canonical([e for e in current if e.entry_id in survivor_ids])
    needs_reorder = reorder and not in_order

    if in_order and len(survivors) == len(current):
        logger.info("Playlist already in order")

    report = Report(in_order=in_order)
    positions = {e.entry_id: i for i, e in enumerate(survivors)}
    for decision in decisions:
        entry = decision.entry
        if not decision.keep:
            report.actions.append(
                Action(entry.entry_id, ActionKind.REMOVE, reason=decision.reason, title=entry.title)
            )
            report.intents.append(Intent(IntentKind.DELETE, entry.entry_id))
        elif needs_reorder:
            report.actions.append(
                Action(
                    entry.entry_id,
                    ActionKind.REORDER,
                    position=positions[entry.entry_id],
                    title=entry.title,
                )
            )
        else:
            report.actions.append(Action(entry.entry_id, ActionKind.KEEP, title=entry.title))

    if needs_reorder:
        report.intents.extend(
            Intent(IntentKind.SET_POSITION, e.entry_id, positions[e.entry_id]) for e in survivors
        )

    logger.debug(
        f"Reconciled {len(current)} entries: "
        f"{len(report.removals())} to remove, {len(report.reorders())} to reposition"
    )
    return report
