from __future__ import annotations

from fastapi import HTTPException, status

from app.quiz.errors import (
    AnswerOptionNotFoundError,
    CategoryNotFoundError,
    QuestionNotFoundError,
    QuestionTypeNotFoundError,
    QuizError,
    QuizNotFoundError,
    QuizValidationError,
    UserNotFoundError,
)

NOT_FOUND_DETAILS: dict[type[QuizNotFoundError], tuple[str, str]] = {
    UserNotFoundError: ("E_USER_NOT_FOUND", "User not found"),
    CategoryNotFoundError: ("E_CATEGORY_NOT_FOUND", "Category not found"),
    QuestionTypeNotFoundError: ("E_QUESTION_TYPE_NOT_FOUND", "Question type not found"),
    QuestionNotFoundError: ("E_QUESTION_NOT_FOUND", "Invalid question or answer"),
    AnswerOptionNotFoundError: ("E_ANSWER_OPTION_NOT_FOUND", "Invalid question or answer"),
}


def error_detail(code: str, message: str) -> dict[str, str]:
    return {"code": code, "message": message}


def to_http_exception(exc: QuizError) -> HTTPException:
    if isinstance(exc, QuizValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail("E_VALIDATION", str(exc) or "Invalid request"),
        )
    if isinstance(exc, QuizNotFoundError):
        code, message = NOT_FOUND_DETAILS.get(type(exc), ("E_NOT_FOUND", "Not found"))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error_detail(code, message))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail("E_INTERNAL", "Internal server error"),
    )
