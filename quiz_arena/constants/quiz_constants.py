"""Quiz-related constants shared across UI and core layers."""

QUESTION_COUNT: int = 10
TIME_LIMITS_SECONDS: dict[str, int] = {"easy": 30, "medium": 45, "hard": 60}
POINTS_PER_CORRECT: int = 10
STREAK_BONUS_STEP: int = 3
GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
)
FAILING_GRADE: str = "F"
TIME_WARNING_SECONDS: int = 10
DEFAULT_CATALOG_FILENAME: str = "question_bank.txt"
