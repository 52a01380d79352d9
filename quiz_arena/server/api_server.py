"""FastAPI server that lets a browser play a quiz session."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, StrictInt
import uvicorn

from quiz_arena.constants.about import APP_NAME, APP_VERSION
from quiz_arena.constants.network_constants import API_LOG_LEVEL, DEFAULT_HOST, DEFAULT_PORT
from quiz_arena.constants.quiz_constants import TIME_WARNING_SECONDS
from quiz_arena.core.markdown_renderer import renderer
from quiz_arena.core.models import Difficulty, SessionPhase, SessionState
from quiz_arena.core.quiz_manager import QuizManager
from quiz_arena.core.scoring import SessionNotFinishedError
from quiz_arena.core.services.result_history import ResultHistory
from quiz_arena.core.session_machine import EmptyQuestionPoolError, InvalidAnswerError

logger = logging.getLogger(__name__)

_PLAYER_PAGE_HTML = """<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>QuizArena</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0 auto; max-width: 46rem; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; }
      .hidden { display: none; }
      button { border: none; border-radius: 0.75rem; padding: 0.85rem 1.5rem; font-size: 1rem; background: #1f9aa5; color: #fff; cursor: pointer; }
      button:disabled { opacity: 0.6; cursor: not-allowed; }
      .options { display: grid; grid-template-columns: repeat(auto-fit, minmax(240px, 1fr)); gap: 0.75rem; }
      .option.correct { background: #15803d; }
      .option.wrong { background: #b91c1c; }
      .meta { display: flex; justify-content: space-between; }
      .warning { color: #facc15; }
      .status { color: #f87171; }
    </style>
  </head>
  <body>
    <p id=\"status\" class=\"status hidden\"></p>
    <div id=\"start-card\" class=\"card\">
      <h2>Select Difficulty</h2>
      <div id=\"difficulties\" class=\"options\"></div>
    </div>
    <div id=\"quiz-card\" class=\"card hidden\">
      <div class=\"meta\"><span id=\"domain\"></span><span id=\"progress\"></span><span id=\"timer\"></span></div>
      <div id=\"question\"></div>
      <div id=\"options\" class=\"options\"></div>
      <div id=\"explanation\" class=\"hidden\"></div>
      <p><button id=\"next-button\" class=\"hidden\">Next →</button></p>
    </div>
    <div id=\"results-card\" class=\"card hidden\">
      <h2 id=\"grade\"></h2>
      <p id=\"result-score\"></p>
      <button id=\"again-button\">Try Again</button>
    </div>
    <script>
      const WARNING_SECONDS = __WARNING_SECONDS__;
      let tickHandle = null;

      async function post(path, body) {
        const response = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body ?? {}),
        });
        const payload = await response.json();
        if (!response.ok) { throw new Error(payload.detail ?? 'Request failed'); }
        return payload;
      }

      function show(id, visible) { document.getElementById(id).classList.toggle('hidden', !visible); }

      function showStatus(message) {
        document.getElementById('status').textContent = message;
        show('status', Boolean(message));
      }

      // Sends a command and renders the returned state; failures are shown, not thrown.
      async function act(request) {
        try {
          render(await request());
        } catch (error) {
          showStatus(error.message);
        }
      }

      function startTicking() { if (!tickHandle) { tickHandle = setInterval(() => act(onSecond), 1000); } }

      function stopTicking() { if (tickHandle) { clearInterval(tickHandle); tickHandle = null; } }

      async function onSecond() {
        let state = await post('/session/tick');
        if (state.phase === 'in_progress' && state.time_left === 0) {
          state = await post('/session/timeout');
        }
        return state;
      }

      function render(state) {
        showStatus('');
        show('start-card', state.phase === 'idle');
        show('quiz-card', state.phase === 'in_progress' || state.phase === 'resolved');
        show('results-card', state.phase === 'finished');
        // The countdown runs exactly while a question is open, including after a reload.
        if (state.phase === 'in_progress') { startTicking(); } else { stopTicking(); }
        if (state.phase === 'finished') { renderResults().catch((error) => showStatus(error.message)); return; }
        if (!state.question) { return; }
        document.getElementById('domain').textContent = state.question.domain;
        document.getElementById('progress').textContent = (state.current_index + 1) + ' / ' + state.total;
        const timer = document.getElementById('timer');
        timer.textContent = state.time_left + 's';
        timer.classList.toggle('warning', state.time_left <= WARNING_SECONDS);
        document.getElementById('question').innerHTML = state.question.question_html;
        const options = document.getElementById('options');
        options.innerHTML = '';
        state.question.options.forEach((html, index) => {
          const button = document.createElement('button');
          button.className = 'option';
          button.innerHTML = String.fromCharCode(65 + index) + '. ' + html;
          button.disabled = state.answered;
          if (state.answered && index === state.correct_option_index) { button.classList.add('correct'); }
          if (state.answered && state.last_answer && index === state.last_answer.selected && !state.last_answer.correct) {
            button.classList.add('wrong');
          }
          button.onclick = () => act(() => post('/session/answer', { selected_option_index: index }));
          options.appendChild(button);
        });
        const explanation = document.getElementById('explanation');
        explanation.innerHTML = state.explanation_html ?? '';
        show('explanation', state.answered);
        const nextButton = document.getElementById('next-button');
        nextButton.textContent = state.current_index + 1 >= state.total ? 'Finish →' : 'Next →';
        show('next-button', state.answered);
      }

      async function renderResults() {
        const summary = await (await fetch('/session/summary')).json();
        document.getElementById('grade').textContent = summary.grade;
        document.getElementById('result-score').textContent =
          'You scored ' + summary.score + ' / ' + summary.total + ' (' + summary.percentage + '%), best streak ' + summary.best_streak + '.';
      }

      function startQuiz(difficulty) {
        stopTicking();
        return act(() => post('/session/start', { difficulty }));
      }

      async function loadCatalog() {
        const catalog = await (await fetch('/catalog')).json();
        const container = document.getElementById('difficulties');
        Object.entries(catalog.pools).forEach(([difficulty, count]) => {
          const button = document.createElement('button');
          button.textContent = difficulty + ' (' + count + ' questions, ' + catalog.time_limits[difficulty] + 's each)';
          button.disabled = count === 0;
          button.onclick = () => startQuiz(difficulty);
          container.appendChild(button);
        });
      }

      document.getElementById('next-button').onclick = () => act(() => post('/session/next'));
      document.getElementById('again-button').onclick = () => act(() => post('/session/reset'));

      loadCatalog().catch((error) => showStatus(error.message));
      act(async () => (await fetch('/session')).json());
    </script>
  </body>
</html>
""".replace("__WARNING_SECONDS__", str(TIME_WARNING_SECONDS))


class StartPayload(BaseModel):
    """Payload schema for starting a session."""

    difficulty: Difficulty


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    selected_option_index: StrictInt


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def session_payload(state: SessionState) -> dict[str, object]:
    """Serialize a session snapshot without revealing unanswered solutions."""
    payload: dict[str, object] = {
        "phase": state.phase.name.lower(),
        "difficulty": state.difficulty.value if state.difficulty else None,
        "active": state.active,
        "finished": state.finished,
        "answered": state.answered,
        "current_index": state.current_index,
        "total": state.total,
        "progress_percent": state.progress_percent,
        "score": state.score,
        "streak": state.streak,
        "best_streak": state.best_streak,
        "time_left": state.time_left,
        "time_limit_seconds": state.time_limit_seconds,
        "question": None,
        "correct_option_index": None,
        "explanation_html": None,
        "last_answer": None,
    }
    question = state.current_question
    if question is None:
        return payload

    payload["question"] = {
        "id": question.id,
        "question_html": renderer.render_fragment(question.question),
        "options": [renderer.render_inline(option) for option in question.options],
        "domain": question.domain,
    }
    if state.phase is SessionPhase.RESOLVED:
        answer = state.answers[state.current_index]
        payload["correct_option_index"] = question.correct_answer
        payload["explanation_html"] = renderer.render_fragment(question.explanation)
        payload["last_answer"] = {
            "selected": answer.selected,
            "correct": answer.correct,
            "skipped": answer.skipped,
        }
    return payload


def create_api_app(quiz_manager: QuizManager, history: ResultHistory) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.get("/", response_class=HTMLResponse)
    def serve_player_page() -> str:
        return _PLAYER_PAGE_HTML

    @app.get("/catalog")
    def get_catalog(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        catalog = manager.get_catalog()
        return {
            "total_questions": len(catalog),
            "total_domains": catalog.domain_count(),
            "pools": {tier.value: size for tier, size in catalog.pool_sizes().items()},
            "time_limits": {tier.value: manager.get_time_limit(tier) for tier in Difficulty},
        }

    @app.get("/session")
    def get_session(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return session_payload(manager.get_state())

    @app.post("/session/start")
    def start_session(
        payload: StartPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            state = manager.start_quiz(payload.difficulty)
        except EmptyQuestionPoolError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return session_payload(state)

    @app.post("/session/answer")
    def submit_answer(
        payload: AnswerPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            state = manager.answer(payload.selected_option_index)
        except InvalidAnswerError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return session_payload(state)

    @app.post("/session/timeout")
    def timeout_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return session_payload(manager.timeout())

    @app.post("/session/next")
    def next_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return session_payload(manager.next_question())

    @app.post("/session/tick")
    def tick(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return session_payload(manager.tick())

    @app.post("/session/reset")
    def reset_session(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return session_payload(manager.reset())

    @app.get("/session/summary")
    def get_summary(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            summary = manager.get_summary()
        except SessionNotFinishedError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return summary.to_payload()

    @app.get("/history")
    def get_history() -> list[dict[str, object]]:
        return [entry.to_payload() for entry in history.entries()]

    return app


def start_api_server(
    quiz_manager: QuizManager,
    history: ResultHistory,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager, history)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=API_LOG_LEVEL)
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    logger.info("Browser client listening on %s:%d", host, port)
    return thread
