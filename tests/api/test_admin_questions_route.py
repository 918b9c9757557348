from __future__ import annotations

import pytest

from tests.quiz_fixtures import TRUE_FALSE, _create_category, _create_user


def _payload(category_id: int, **overrides) -> dict:
    payload = {
        "categoryId": category_id,
        "questionTypeId": TRUE_FALSE,
        "questionText": "True or False: Colorful websites are always safe.",
        "explanation": "Looks can be deceiving.",
        "hintText": "Can appearances trick you?",
        "options": [
            {"text": "True", "icon": "✅", "isCorrect": False},
            {"text": "False", "icon": "❌", "isCorrect": True},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_admin_question_is_created_and_served(client, session_factory) -> None:
    category_id = await _create_category(session_factory, name="Safe Clicking", icon="🖱️")
    user_id = await _create_user(session_factory)

    response = await client.post("/api/admin/questions", json=_payload(category_id))

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Question created successfully"
    question_id = body["questionId"]

    categories = (await client.get(f"/api/categories/{user_id}")).json()["categories"]
    assert categories[0]["total_questions"] == 1

    served = (await client.get(f"/api/questions/{user_id}/{category_id}")).json()["question"]
    assert served["id"] == question_id
    assert served["points"] == 10
    assert [option["option_text"] for option in served["options"]] == ["True", "False"]
    assert [option["icon"] for option in served["options"]] == ["✅", "❌"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "options",
    [
        [],
        [{"text": "True"}, {"text": "False"}],
        [{"text": "True", "isCorrect": True}, {"text": "False", "isCorrect": True}],
    ],
)
async def test_admin_question_needs_exactly_one_correct_option(client, session_factory, options) -> None:
    category_id = await _create_category(session_factory)

    response = await client.post("/api/admin/questions", json=_payload(category_id, options=options))

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "E_VALIDATION"


@pytest.mark.asyncio
async def test_admin_question_for_unknown_category_is_404(client, session_factory) -> None:
    category_id = await _create_category(session_factory)

    response = await client.post("/api/admin/questions", json=_payload(category_id + 40))

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "E_CATEGORY_NOT_FOUND"
