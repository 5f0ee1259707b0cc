"""Command-line entry point: extract a document and build a flashcard deck."""

import argparse
import asyncio
import sys

from studydeck.exceptions import GenerationError
from studydeck.export import write_csv
from studydeck.generator import FlashcardGenerator
from studydeck.logger import setup_logging
from studydeck.parser import parse_document

EXIT_OK = 0
EXIT_EXTRACTION_FAILED = 1
EXIT_GENERATION_FAILED = 2


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate study flashcards from a .txt, .pdf or .docx file")
    parser.add_argument("path", help="Study material file")
    parser.add_argument("--text-only", action="store_true", help="Print extracted text and stop")
    parser.add_argument("--csv", dest="csv_path", default=None, help="Write the deck to this CSV file")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    outcome = parse_document(file_path=args.path)
    if not outcome.ok:
        print(f"Error: {outcome.error.message}", file=sys.stderr)
        return EXIT_EXTRACTION_FAILED

    if args.text_only:
        print(outcome.text, end="")
        return EXIT_OK

    generator = FlashcardGenerator()
    try:
        cards = asyncio.run(generator.generate(outcome.text))
    except GenerationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_GENERATION_FAILED

    for number, card in enumerate(cards, start=1):
        print(f"{number}. Q: {card.question}")
        print(f"   A: {card.answer}")

    if args.csv_path:
        written = write_csv(cards, args.csv_path)
        print(f"Saved {len(cards)} flashcards to {written}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
