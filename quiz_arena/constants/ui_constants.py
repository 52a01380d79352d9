"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizArena"
TICK_INTERVAL_MS: int = 1000
OPTION_LETTERS: tuple[str, ...] = ("A", "B", "C", "D")

DIFFICULTY_LABELS: dict[str, str] = {"easy": "Easy", "medium": "Medium", "hard": "Hard"}
DIFFICULTY_DESCRIPTIONS: dict[str, str] = {
    "easy": "Fundamentals & basics. Great for beginners or warm-up rounds.",
    "medium": "Intermediate concepts. Apply your knowledge to real scenarios.",
    "hard": "Advanced challenges. Deep expertise and edge cases.",
}

NAV_BUTTON_PLAY: str = "Play"
NAV_BUTTON_HISTORY: str = "History"
NAV_BUTTON_SETTINGS: str = "Settings"
NAV_BUTTON_ABOUT: str = "About"
NAV_BUTTON_HELP: str = "Help"

START_BUTTON: str = "Start"
EXPLANATION_SHOW: str = "Show Explanation"
EXPLANATION_HIDE: str = "Hide Explanation"
NEXT_BUTTON: str = "Next →"
FINISH_BUTTON: str = "Finish →"
TRY_AGAIN_BUTTON: str = "Try Again"
HOME_BUTTON: str = "Home"

EMPTY_POOL_MESSAGE: str = "There are no questions for this difficulty yet."
NO_HISTORY_MESSAGE: str = "No quizzes completed yet. Finish a quiz to see it here."
SKIPPED_ANSWER_TEXT: str = "Skipped (time ran out)"
