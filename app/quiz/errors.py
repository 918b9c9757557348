class QuizError(Exception):
    pass


class QuizValidationError(QuizError):
    pass


class QuizNotFoundError(QuizError):
    pass


class UserNotFoundError(QuizNotFoundError):
    pass


class CategoryNotFoundError(QuizNotFoundError):
    pass


class QuestionTypeNotFoundError(QuizNotFoundError):
    pass


class QuestionNotFoundError(QuizNotFoundError):
    pass


class AnswerOptionNotFoundError(QuizNotFoundError):
    pass
