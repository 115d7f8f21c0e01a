"""FastAPI server that exposes the learner's quiz session over HTTP."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from quiz_quest.constants.network_constants import API_TITLE, API_VERSION, DEFAULT_HOST, DEFAULT_PORT
from quiz_quest.core.markdown_math_renderer import renderer
from quiz_quest.core.models import OperationResult, Quiz, RejectionKind, SessionPhase, SessionSnapshot
from quiz_quest.core.quiz_manager import QuizManager
from quiz_quest.core.services.scorer import is_celebration

_REJECTION_STATUS = {
    RejectionKind.INVALID_PHASE: 409,
    RejectionKind.AT_BOUNDARY: 409,
    RejectionKind.INVALID_ARGUMENT: 422,
}

_LEARNER_PAGE_HTML = """<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>QuizQuest</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.4); }
      .hidden { display: none; }
      button { border: none; border-radius: 0.75rem; padding: 0.75rem 1.25rem; font-size: 1rem; background: #1f9aa5; color: #fff; cursor: pointer; }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      .options-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 0.75rem; margin: 1rem 0; }
      .option-button.selected { background: #2563eb; }
      .option-button.correct { background: #16a34a; }
      .option-button.wrong { background: #dc2626; }
      .row { display: flex; gap: 0.5rem; flex-wrap: wrap; align-items: center; }
      #timer.low { color: #f87171; }
      .note { color: #94a3b8; }
      .hint { border-left: 4px solid #facc15; padding-left: 0.75rem; }
      .explanation { border-left: 4px solid #60a5fa; padding-left: 0.75rem; }
    </style>
    <script>
      window.MathJax = { tex: { inlineMath: [['$','$']], displayMath: [['$$','$$']] }, svg: { fontCache: 'global' } };
    </script>
    <script defer src=\"https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js\"></script>
  </head>
  <body>
    <section class=\"card\" id=\"select-card\">
      <h1>QuizQuest</h1>
      <p id=\"xp-status\" class=\"note\"></p>
      <div id=\"quiz-list\" class=\"options-grid\"></div>
    </section>
    <section class=\"card hidden\" id=\"quiz-card\">
      <div class=\"row\"><button id=\"back-button\">&larr; Back</button><span id=\"position\"></span><span id=\"timer\"></span></div>
      <div id=\"question\"></div>
      <div id=\"options\" class=\"options-grid\"></div>
      <div id=\"hint\" class=\"hint\"></div>
      <div id=\"explanation\" class=\"explanation\"></div>
      <div class=\"row\">
        <button id=\"prev-button\">Previous</button>
        <button id=\"hint-button\">Hint</button>
        <button id=\"explain-button\">Explanation</button>
        <button id=\"next-button\">Next</button>
      </div>
      <p id=\"status\" class=\"note\"></p>
    </section>
    <section class=\"card hidden\" id=\"result-card\">
      <h2 id=\"result-title\"></h2>
      <p id=\"result-detail\"></p>
      <p id=\"reward\" class=\"note\"></p>
      <div class=\"row\"><button id=\"retake-button\">Retake</button><button id=\"done-button\">Back to quizzes</button></div>
    </section>
    <script>
      const $ = (id) => document.getElementById(id);
      let lastRenderKey = null;
      let current = null;

      function show(card) {
        ['select-card', 'quiz-card', 'result-card'].forEach(id => $(id).classList.toggle('hidden', id !== card));
      }

      async function call(method, path, body) {
        const response = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const payload = await response.json().catch(() => ({}));
        if (!response.ok) {
          $('status').textContent = payload.detail || 'Request failed.';
        } else {
          $('status').textContent = '';
        }
        await refresh(true);
        return payload;
      }

      function formatTime(seconds) {
        return `⏰ ${Math.floor(seconds / 60)}:${String(seconds % 60).padStart(2, '0')}`;
      }

      async function loadQuizzes() {
        const [quizzes, rewards] = await Promise.all([
          fetch('/quizzes').then(r => r.json()),
          fetch('/rewards').then(r => r.json()),
        ]);
        $('xp-status').textContent = `Level ${rewards.level} · ${rewards.total_xp} XP`;
        const list = $('quiz-list');
        list.innerHTML = '';
        quizzes.forEach(quiz => {
          const button = document.createElement('button');
          button.textContent = `${quiz.title} (${quiz.question_count} questions, +${quiz.xp_reward} XP)`;
          button.addEventListener('click', () => call('POST', '/session/start', { quiz_id: quiz.id }));
          list.appendChild(button);
        });
      }

      function renderSession(s, force) {
        if (s.phase === 'COMPLETED') {
          show('result-card');
          $('result-title').textContent = s.celebrate ? `🎉 ${s.percentage}%` : `${s.percentage}%`;
          $('result-detail').textContent = `${s.result.earned_points} / ${s.result.max_points} points · hints used: ${s.hints_used}`;
          $('reward').textContent = [s.reward_message, s.completion_notice].filter(Boolean).join(' ');
          return;
        }
        current = s;
        show('quiz-card');
        $('position').textContent = `Question ${s.current_index + 1} of ${s.question_count}`;
        $('timer').textContent = s.remaining_seconds === null ? '' : formatTime(s.remaining_seconds);
        $('timer').classList.toggle('low', s.remaining_seconds !== null && s.remaining_seconds < 60);
        const key = JSON.stringify([s.current_index, s.selected_option_index, s.hint_shown, s.explanation_shown]);
        if (!force && key === lastRenderKey) return;
        lastRenderKey = key;
        const q = s.question;
        $('question').innerHTML = q.prompt_html;
        const options = $('options');
        options.innerHTML = '';
        q.options_html.forEach((html, index) => {
          const button = document.createElement('button');
          button.className = 'option-button';
          button.innerHTML = `${String.fromCharCode(65 + index)}. ${html}`;
          if (s.selected_option_index === index) button.classList.add('selected');
          if (s.explanation_shown) {
            button.disabled = true;
            if (index === q.correct_option_index) button.classList.add('correct');
            else if (s.selected_option_index === index) button.classList.add('wrong');
          }
          button.addEventListener('click', () => call('POST', '/session/answer', { question_id: q.id, selected_option_index: index }));
          options.appendChild(button);
        });
        $('hint').innerHTML = s.hint_shown && q.hint_html ? `💡 ${q.hint_html}` : '';
        $('explanation').innerHTML = s.explanation_shown && q.explanation_html ? q.explanation_html : '';
        $('hint-button').textContent = `${s.hint_shown ? 'Hide hint' : 'Hint'} (${s.hints_used})`;
        $('explain-button').textContent = s.explanation_shown ? 'Hide explanation' : 'Explanation';
        $('explain-button').disabled = !s.can_reveal_explanation;
        $('prev-button').disabled = s.current_index === 0;
        $('next-button').textContent = s.current_index === s.question_count - 1 ? 'Finish' : 'Next';
        if (window.MathJax && window.MathJax.typesetPromise) {
          window.MathJax.typesetPromise([$('quiz-card')]).catch(() => {});
        }
      }

      async function refresh(force = false) {
        try {
          const s = await fetch('/session').then(r => r.json());
          if (!s.phase) {
            if (!$('select-card').classList.contains('hidden') && !force) return;
            lastRenderKey = null;
            show('select-card');
            await loadQuizzes();
            return;
          }
          renderSession(s, force);
        } catch (error) {
          $('status').textContent = 'Unable to reach the quiz server.';
        }
      }

      $('back-button').addEventListener('click', () => call('DELETE', '/session'));
      $('done-button').addEventListener('click', () => call('DELETE', '/session'));
      $('retake-button').addEventListener('click', () => call('POST', '/session/retake'));
      $('prev-button').addEventListener('click', () => call('POST', '/session/previous'));
      $('next-button').addEventListener('click', () => call('POST', '/session/next'));
      $('hint-button').addEventListener('click', () => {
        call(current && current.hint_shown ? 'DELETE' : 'POST', '/session/hint');
      });
      $('explain-button').addEventListener('click', () => {
        call(current && current.explanation_shown ? 'DELETE' : 'POST', '/session/explanation');
      });

      refresh(true);
      setInterval(refresh, 1000);
    </script>
  </body>
</html>
"""


class StartPayload(BaseModel):
    """Payload schema for starting a quiz."""

    quiz_id: str


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers. Omit question_id to answer the current question."""

    selected_option_index: int
    question_id: str | None = None


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _serialize_quiz(quiz: Quiz) -> dict[str, object]:
    return {
        "id": quiz.id,
        "title": quiz.title,
        "description": quiz.description,
        "difficulty": quiz.difficulty.value,
        "question_count": quiz.question_count,
        "total_points": quiz.total_points,
        "time_limit_seconds": quiz.time_limit_seconds,
        "xp_reward": quiz.xp_reward,
    }


def _serialize_snapshot(snapshot: SessionSnapshot, reward_message: str | None) -> dict[str, object]:
    payload: dict[str, object] = {
        "quiz_id": snapshot.quiz_id,
        "quiz_title": snapshot.quiz_title,
        "phase": snapshot.phase.value,
        "current_index": snapshot.current_index,
        "question_count": snapshot.question_count,
        "selected_option_index": snapshot.selected_option_index,
        "hint_shown": snapshot.reveal.hint_shown,
        "explanation_shown": snapshot.reveal.explanation_shown,
        "can_reveal_explanation": snapshot.can_reveal_explanation,
        "hints_used": snapshot.hints_used,
        "remaining_seconds": snapshot.remaining_seconds,
        "answered_count": snapshot.answered_count,
        "result": None,
        "percentage": snapshot.percentage,
        "celebrate": False,
        "finish_reason": snapshot.finish_reason.value if snapshot.finish_reason else None,
        "completion_notice": snapshot.completion_notice,
        "reward_message": reward_message,
        "question": None,
    }
    if snapshot.result is not None:
        payload["result"] = {
            "earned_points": snapshot.result.earned_points,
            "max_points": snapshot.result.max_points,
        }
        payload["celebrate"] = is_celebration(snapshot.result)

    question = snapshot.current_question
    if question is not None and snapshot.phase is SessionPhase.ACTIVE:
        reveal_answer = snapshot.reveal.explanation_shown
        payload["question"] = {
            "id": question.id,
            "prompt_html": renderer.render_fragment(question.prompt),
            "options_html": [renderer.render_inline(option) for option in question.options],
            "points": question.points,
            "hint_html": renderer.render_fragment(question.hint_text) if snapshot.reveal.hint_shown and question.hint_text else None,
            "explanation_html": (
                renderer.render_fragment(question.explanation)
                if reveal_answer and question.explanation
                else None
            ),
            # Only disclosed once the learner has asked for the explanation.
            "correct_option_index": question.correct_option_index if reveal_answer else None,
        }
    return payload


def _raise_if_rejected(result: OperationResult) -> None:
    if result.accepted:
        return
    status_code = _REJECTION_STATUS.get(result.kind, 409)
    raise HTTPException(status_code=status_code, detail=result.reason)


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=API_TITLE, version=API_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    def session_state(manager: QuizManager) -> dict[str, object]:
        snapshot, grant = manager.get_snapshot_and_grant()
        if snapshot is None:
            return {"phase": None}
        return _serialize_snapshot(snapshot, grant.message if grant else None)

    def apply(manager: QuizManager, result: OperationResult) -> dict[str, object]:
        _raise_if_rejected(result)
        return session_state(manager)

    @app.get("/", response_class=HTMLResponse)
    def serve_learner_page() -> str:
        return _LEARNER_PAGE_HTML

    @app.get("/quizzes")
    def list_quizzes(manager: QuizManager = Depends(quiz_manager_dep)) -> list[dict[str, object]]:
        return [_serialize_quiz(quiz) for quiz in manager.get_quizzes()]

    @app.get("/rewards")
    def get_rewards(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        summary = manager.get_reward_summary()
        return {
            "total_xp": summary.total_xp,
            "level": summary.level,
            "quizzes_completed": summary.quizzes_completed,
            "last_message": summary.last_grant.message if summary.last_grant else None,
        }

    @app.get("/session")
    def get_session(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return session_state(manager)

    @app.delete("/session")
    def clear_session(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        manager.clear_session()
        return session_state(manager)

    @app.post("/session/start", status_code=201)
    def start_session(
        payload: StartPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            manager.get_quiz(payload.quiz_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown quiz '{payload.quiz_id}'") from exc
        return apply(manager, manager.start_quiz(payload.quiz_id))

    @app.post("/session/retake", status_code=201)
    def retake_session(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.retake_quiz())

    @app.post("/session/answer")
    def submit_answer(
        payload: AnswerPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        if payload.question_id is None:
            result = manager.answer_current_question(payload.selected_option_index)
        else:
            result = manager.answer_question(payload.question_id, payload.selected_option_index)
        return apply(manager, result)

    @app.post("/session/next")
    def next_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.next_question())

    @app.post("/session/previous")
    def previous_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.previous_question())

    @app.post("/session/finish")
    def finish_quiz(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.finish_quiz())

    @app.post("/session/hint")
    def show_hint(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.show_hint())

    @app.delete("/session/hint")
    def hide_hint(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.hide_hint())

    @app.post("/session/explanation")
    def show_explanation(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.show_explanation())

    @app.delete("/session/explanation")
    def hide_explanation(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, manager.hide_explanation())

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
