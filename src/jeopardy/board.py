"""Board model and per-clue reveal rules for the Jeopardy board."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

NUM_CATEGORIES = 6
NUM_CLUES_PER_CATEGORY = 5
CATEGORY_POOL_SIZE = 100

CONCEALED_TEXT = "?"


# ---------- Reveal state ----------


class RevealState(IntEnum):
    """Disclosure progress of a single clue. Ordered, only ever increases."""

    HIDDEN = 0
    QUESTION = 1
    ANSWER = 2

    @property
    def css_class(self) -> str:
        return _CSS_CLASSES[self]


_CSS_CLASSES = {
    RevealState.HIDDEN: "concealed",
    RevealState.QUESTION: "question",
    RevealState.ANSWER: "answer",
}


def next_state(state: RevealState) -> RevealState:
    """Transition applied by a click: Hidden -> Question -> Answer -> Answer."""
    if state is RevealState.HIDDEN:
        return RevealState.QUESTION
    if state is RevealState.QUESTION:
        return RevealState.ANSWER
    if state is RevealState.ANSWER:
        return RevealState.ANSWER
    raise ValueError(f"Unknown reveal state: {state!r}")


# ---------- Clues & categories ----------


@dataclass
class Clue:
    question: str
    answer: str
    showing: RevealState = RevealState.HIDDEN

    def reveal(self) -> bool:
        """Advance one step. Returns False when the click was ignored."""
        new_state = next_state(self.showing)
        if new_state == self.showing:
            return False
        self.showing = new_state
        return True

    def display_text(self) -> str:
        if self.showing is RevealState.QUESTION:
            return self.question
        if self.showing is RevealState.ANSWER:
            return self.answer
        return CONCEALED_TEXT


@dataclass
class Category:
    title: str = ""
    clues: List[Clue] = field(default_factory=list)


@dataclass
class Board:
    """Ordered categories in play; one column per category."""

    categories: List[Category] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.categories)

    def clue_at(self, category_index: int, clue_index: int) -> Clue:
        if category_index < 0 or clue_index < 0:
            raise LookupError(f"No clue at {category_index}-{clue_index}")
        try:
            return self.categories[category_index].clues[clue_index]
        except IndexError as exc:
            raise LookupError(f"No clue at {category_index}-{clue_index}") from exc


# ---------- Cell addressing ----------


def cell_id(category_index: int, clue_index: int) -> str:
    return f"{category_index}-{clue_index}"


def parse_cell_id(value: str) -> Tuple[int, int]:
    """Split a ``"<category>-<clue>"`` identifier back into its indices."""
    category_part, sep, clue_part = value.partition("-")
    if not sep:
        raise ValueError(f"Malformed cell id: {value!r}")
    try:
        return int(category_part), int(clue_part)
    except ValueError as exc:
        raise ValueError(f"Malformed cell id: {value!r}") from exc


# ---------- Click dispatch ----------


@dataclass(frozen=True)
class RenderInstruction:
    """What the page has to do to one cell after a click."""

    category_index: int
    clue_index: int
    state: RevealState
    text: str
    changed: bool

    @property
    def cell_id(self) -> str:
        return cell_id(self.category_index, self.clue_index)

    @property
    def css_class(self) -> str:
        return self.state.css_class


def handle_cell_click(
    board: Board, category_index: int, clue_index: int
) -> RenderInstruction:
    """Apply the reveal transition to the addressed clue.

    Raises ``LookupError`` when the address does not hold a clue.
    """
    clue = board.clue_at(category_index, clue_index)
    changed = clue.reveal()
    return RenderInstruction(
        category_index=category_index,
        clue_index=clue_index,
        state=clue.showing,
        text=clue.display_text(),
        changed=changed,
    )
