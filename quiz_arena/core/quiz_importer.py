"""Utilities for loading the question bank from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    ID: optional stable identifier (defaults to q<block number>)
    Q: Question text (supports markdown). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text
    C: Third option text
    D: Fourth option text
    CORRECT: A|B|C|D
    EXPLANATION: Why the correct option is right (may span lines)
    DIFFICULTY: easy|medium|hard
    DOMAIN: Category label, e.g. Networking

Lines starting with "#" are comments.

Example:

    ID: net-001
    Q: Which port does HTTPS use by default?
    A: 80
    B: 443
    C: 22
    D: 8080
    CORRECT: B
    EXPLANATION: HTTPS is HTTP over TLS and listens on port 443.
    DIFFICULTY: easy
    DOMAIN: Networking
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from quiz_arena.constants.quiz_constants import DEFAULT_CATALOG_FILENAME
from quiz_arena.core.models import Difficulty, QuestionRecord
from quiz_arena.core.services.question_catalog import QuestionCatalog

logger = logging.getLogger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / DEFAULT_CATALOG_FILENAME


class QuizImportError(Exception):
    """Raised when a question bank cannot be parsed."""


@dataclass(slots=True)
class ImportedCatalog:
    """Container for an imported question bank and where it came from."""

    source_path: Path
    questions: list[QuestionRecord]


_OPTION_ORDER = ["A", "B", "C", "D"]
_FIELD_MARKERS = ("ID", "CORRECT", "EXPLANATION", "DIFFICULTY", "DOMAIN")


def load_catalog_from_file(file_path: Path) -> ImportedCatalog:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_catalog_text(text)
    if not questions:
        raise QuizImportError("Question bank did not contain any questions.")
    return ImportedCatalog(source_path=file_path, questions=questions)


def load_default_catalog(working_dir: Path | None = None) -> QuestionCatalog:
    """Load ``question_bank.txt`` from the working directory, else the bundled bank."""
    candidate = (working_dir or Path.cwd()) / DEFAULT_CATALOG_FILENAME
    source = candidate if candidate.exists() else BUNDLED_CATALOG_PATH
    imported = load_catalog_from_file(source)
    catalog = QuestionCatalog(imported.questions)
    logger.info(
        "Loaded %d questions across %d domains from %s",
        len(catalog),
        catalog.domain_count(),
        source,
    )
    return catalog


def parse_catalog_text(text: str) -> list[QuestionRecord]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped.startswith("#"):
            continue
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [_parse_block(block, position) for position, block in enumerate(blocks, start=1) if block]


def _split_marker(line: str) -> tuple[str, str] | None:
    if ":" not in line:
        return None
    marker, value = line.split(":", 1)
    marker = marker.strip().upper()
    if marker == "Q" or marker in _OPTION_ORDER or marker in _FIELD_MARKERS:
        return marker, value.strip()
    return None


def _parse_block(block: str, position: int) -> QuestionRecord:
    fields: dict[str, list[str]] = {}
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        split = _split_marker(line)
        if split is not None:
            marker, value = split
            if marker in fields:
                raise QuizImportError(f"Question {position}: '{marker}:' appears more than once.")
            fields[marker] = [value] if value else []
            current_section = marker
            continue

        if current_section in ("Q", "EXPLANATION", *_OPTION_ORDER):
            fields[current_section].append(line)
        else:
            raise QuizImportError(
                f"Question {position}: encountered text outside of a known section: '{line}'."
            )

    def joined(marker: str) -> str:
        return "\n".join(fields.get(marker, [])).strip()

    question_text = joined("Q")
    if not question_text:
        raise QuizImportError(f"Question {position}: question text missing (Q: ...)")

    options = tuple(joined(letter) for letter in _OPTION_ORDER)
    if any(not option for option in options):
        raise QuizImportError(f"Question {position}: each question must define four options (A-D).")

    correct_letter = joined("CORRECT").upper()
    if correct_letter not in _OPTION_ORDER:
        raise QuizImportError(f"Question {position}: CORRECT must be one of A, B, C, or D.")

    try:
        difficulty = Difficulty(joined("DIFFICULTY").lower())
    except ValueError as exc:
        raise QuizImportError(
            f"Question {position}: DIFFICULTY must be one of easy, medium, or hard."
        ) from exc

    domain = joined("DOMAIN")
    if not domain:
        raise QuizImportError(f"Question {position}: DOMAIN is required.")

    return QuestionRecord(
        id=joined("ID") or f"q{position}",
        question=question_text,
        options=options,
        correct_answer=_OPTION_ORDER.index(correct_letter),
        explanation=joined("EXPLANATION"),
        difficulty=difficulty,
        domain=domain,
    )
