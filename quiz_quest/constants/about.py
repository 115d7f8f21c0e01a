"""Static metadata describing QuizQuest."""

APP_NAME = "QuizQuest"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizQuest is a gamified practice tool: pick a quiz, answer at your own pace "
    "or against the clock, peek at hints when stuck, and earn XP for good scores. "
    "The same session can be played from the desktop window or from a browser."
)

HELP_TEXT = (
    "Quizzes are plain .txt files placed in the quiz library folder. "
    "An optional header block is followed by question blocks separated by blank lines or '---':\n\n"
    "TITLE: JavaScript Basics\nTIMELIMIT: 600\nXP: 100\n\n"
    "Q: Which method adds an element to the end of an array?\n"
    "A: push()\nB: pop()\nC: shift()\nD: unshift()\n"
    "CORRECT: A\nPOINTS: 10\n"
    "EXPLANATION: push() appends one or more elements.\n\n"
    "Pressing Next on the last question finishes the quiz."
)
