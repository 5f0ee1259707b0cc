"""CSV export for generated decks."""

from pathlib import Path
from typing import Iterable, Union

from studydeck.models import Flashcard

DEFAULT_CSV_NAME = "study-decks.csv"


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def flashcards_to_csv(cards: Iterable[Flashcard]) -> str:
    """Render cards as a ``Question,Answer`` table with every field quoted.

    The header line always ends in a newline, so an empty deck is just
    the header line.
    """
    rows = (f"{_quote(card.question)},{_quote(card.answer)}" for card in cards)
    return "Question,Answer\n" + "\n".join(rows)


def write_csv(cards: Iterable[Flashcard], path: Union[str, Path] = DEFAULT_CSV_NAME) -> Path:
    path = Path(path)
    path.write_text(flashcards_to_csv(cards), encoding="utf-8")
    return path
