from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import make_quiz

from quiz_quest.core.quiz_manager import QuizManager
from quiz_quest.server.api_server import create_api_app


@pytest.fixture()
def manager(scheduler, fake_clock) -> QuizManager:
    quiz_manager = QuizManager(scheduler=scheduler, time_source=fake_clock)
    quiz_manager.load_quizzes([make_quiz(), make_quiz(time_limit_seconds=5, quiz_id="timed")])
    return quiz_manager


@pytest.fixture()
def client(manager) -> TestClient:
    with TestClient(create_api_app(manager)) as tc:
        yield tc


def test_learner_page_and_quiz_list(client):
    page = client.get("/")
    assert page.status_code == 200
    assert "text/html" in page.headers["content-type"]

    quizzes = client.get("/quizzes").json()
    assert [quiz["id"] for quiz in quizzes] == ["sample", "timed"]
    assert quizzes[0]["total_points"] == 40
    assert quizzes[1]["time_limit_seconds"] == 5


def test_empty_session(client):
    response = client.get("/session")
    assert response.status_code == 200
    assert response.json() == {"phase": None}


def test_happy_path_attempt(client):
    start = client.post("/session/start", json={"quiz_id": "sample"})
    assert start.status_code == 201
    body = start.json()
    assert body["phase"] == "ACTIVE"
    assert body["question"]["id"] == "q1"
    assert body["question"]["correct_option_index"] is None
    assert len(body["question"]["options_html"]) == 3

    answered = client.post("/session/answer", json={"selected_option_index": 1})
    assert answered.json()["selected_option_index"] == 1

    revealed = client.post("/session/explanation").json()
    assert revealed["explanation_shown"] is True
    assert revealed["question"]["correct_option_index"] == 1
    assert "2 + 2 = 4" in revealed["question"]["explanation_html"]

    client.post("/session/answer", json={"question_id": "q2", "selected_option_index": 0})
    client.post("/session/next")
    client.post("/session/next")
    client.post("/session/answer", json={"selected_option_index": 2})
    finished = client.post("/session/next").json()

    assert finished["phase"] == "COMPLETED"
    assert finished["result"] == {"earned_points": 40, "max_points": 40}
    assert finished["percentage"] == 100
    assert finished["celebrate"] is True
    assert finished["finish_reason"] == "LAST_QUESTION"
    assert finished["reward_message"] == "Quiz completed! +100 XP earned!"
    assert finished["question"] is None

    rewards = client.get("/rewards").json()
    assert rewards["total_xp"] == 100
    assert rewards["quizzes_completed"] == 1


def test_hint_reveal_and_counter(client):
    client.post("/session/start", json={"quiz_id": "sample"})
    client.post("/session/next")
    shown = client.post("/session/hint").json()
    assert shown["hint_shown"] is True
    assert shown["hints_used"] == 1
    assert "divisible" in shown["question"]["hint_html"]

    hidden = client.delete("/session/hint").json()
    assert hidden["hint_shown"] is False
    assert hidden["question"]["hint_html"] is None
    assert hidden["hints_used"] == 1


def test_rejections_map_to_status_codes(client):
    assert client.post("/session/next").status_code == 409

    assert client.post("/session/start", json={"quiz_id": "missing"}).status_code == 404

    client.post("/session/start", json={"quiz_id": "sample"})
    assert client.post("/session/start", json={"quiz_id": "timed"}).status_code == 409
    assert client.post("/session/previous").status_code == 409

    bad_option = client.post("/session/answer", json={"selected_option_index": 9})
    assert bad_option.status_code == 422
    assert "out of range" in bad_option.json()["detail"]

    unknown_question = client.post(
        "/session/answer", json={"question_id": "zzz", "selected_option_index": 0}
    )
    assert unknown_question.status_code == 422

    assert client.post("/session/retake").status_code == 409


def test_finish_retake_and_clear(client):
    client.post("/session/start", json={"quiz_id": "sample"})
    first = client.post("/session/finish")
    assert first.status_code == 200
    again = client.post("/session/finish")
    assert again.status_code == 200
    assert again.json()["result"] == first.json()["result"]

    retake = client.post("/session/retake")
    assert retake.status_code == 201
    assert retake.json()["phase"] == "ACTIVE"

    cleared = client.delete("/session")
    assert cleared.json() == {"phase": None}


def test_timed_session_reports_countdown(client, scheduler):
    started = client.post("/session/start", json={"quiz_id": "timed"}).json()
    assert started["remaining_seconds"] == 5
    scheduler.advance(2)
    assert client.get("/session").json()["remaining_seconds"] == 3
    scheduler.advance(3)
    expired = client.get("/session").json()
    assert expired["phase"] == "COMPLETED"
    assert expired["finish_reason"] == "TIME_EXPIRED"


def test_expired_session_carries_reward_message(client, scheduler):
    client.post("/session/start", json={"quiz_id": "timed"})
    for question_id, option in (("q1", 1), ("q2", 0), ("q3", 2)):
        client.post("/session/answer", json={"question_id": question_id, "selected_option_index": option})
    scheduler.advance(5)
    body = client.get("/session").json()
    assert body["finish_reason"] == "TIME_EXPIRED"
    assert body["reward_message"] == "Quiz completed! +100 XP earned!"
