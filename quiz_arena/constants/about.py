"""Static metadata describing QuizArena."""

APP_NAME = "QuizArena"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizArena is a timed multiple-choice quiz. Pick a difficulty, answer ten "
    "questions against the clock and chain correct answers for streak bonuses. "
    "Play on the desktop or from any browser on the local network."
)

HELP_TEXT = (
    "Each question has a countdown: 30 seconds on Easy, 45 on Medium and 60 on Hard. "
    "A correct answer scores 10 points, plus one bonus point for every full run of "
    "three correct answers in a row. Running out of time counts as a skipped, "
    "incorrect answer and breaks your streak.\n\n"
    "Grades: A+ from 90%, A from 80%, B from 70%, C from 60%, otherwise F.\n\n"
    "Put a question_bank.txt next to the application to use your own questions. "
    "Blocks look like:\n\n"
    "Q: Which port does HTTPS use by default?\n"
    "A: 80\nB: 443\nC: 22\nD: 8080\n"
    "CORRECT: B\nEXPLANATION: HTTPS listens on 443.\n"
    "DIFFICULTY: easy\nDOMAIN: Networking"
)
