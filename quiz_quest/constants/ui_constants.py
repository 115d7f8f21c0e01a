"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizQuest"
SESSION_REFRESH_INTERVAL_MS: int = 250

SELECTION_DESCRIPTION: str = "Pick a quiz to start practising."
SELECTION_EMPTY_STATE: str = "No quizzes found in the library."
SELECTION_START_BUTTON: str = "Start Quiz"
SELECTION_PROGRESS_TEMPLATE: str = "Level {level} · {xp} XP"

QUIZ_BACK_BUTTON: str = "Back to Quizzes"
QUIZ_PREV_BUTTON: str = "Previous"
QUIZ_NEXT_BUTTON: str = "Next"
QUIZ_FINISH_BUTTON: str = "Finish Quiz"
QUIZ_SHOW_HINT_TEMPLATE: str = "Hint ({count})"
QUIZ_HIDE_HINT_TEMPLATE: str = "Hide Hint ({count})"
QUIZ_SHOW_EXPLANATION: str = "Show Explanation"
QUIZ_HIDE_EXPLANATION: str = "Hide Explanation"
QUIZ_POSITION_TEMPLATE: str = "Question {number} of {total}"

RESULTS_RETAKE_BUTTON: str = "Retake Quiz"
RESULTS_BACK_BUTTON: str = "Back to Quizzes"
RESULTS_CELEBRATION: str = "Outstanding work!"
RESULTS_TIME_EXPIRED: str = "Time ran out before you finished."

CONFIRM_LEAVE_MESSAGE: str = "Leave this quiz? Your progress will be discarded."
NO_QUIZ_SELECTED_MESSAGE: str = "Please select a quiz first."
