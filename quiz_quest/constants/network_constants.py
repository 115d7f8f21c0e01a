"""Network configuration constants for the learner API."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
API_TITLE: str = "QuizQuest API"
API_VERSION: str = "0.1.0"
