STRUGGLING_SUCCESS_RATE_THRESHOLD = 60.0
STRUGGLING_MIN_ATTEMPTS = 3

EASY_DIFFICULTY_LEVEL = "easy"
EASIER_QUESTION_TYPE_NAMES = ("visual_choice", "true_false")

DIFFICULTY_LEVELS = ("easy", "medium", "hard")

USER_NAME_MAX_LENGTH = 100
DEFAULT_QUESTION_POINTS = 10
