from __future__ import annotations

import logging
import secrets
from collections import OrderedDict
from html import escape
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings
from .db import configure_engine, init_db
from .gateway import StoreSubmissionGateway
from .surveys.engine import list_responses, load_survey, record_response
from .surveys.schema import SurveySpec
from .wizard.controls import read_control, render_control, toggle_option
from .wizard.machine import SurveyWizard


logger = logging.getLogger(__name__)

SESSION_COOKIE = "wizard_session"


class WizardSessions:
    """In-memory wizard state, one ``SurveyWizard`` per browser session.

    Holds at most ``max_sessions`` wizards; the least recently used one is
    dropped when a new session would exceed the cap.
    """

    def __init__(self, survey: SurveySpec, max_sessions: int = 1000) -> None:
        self.survey = survey
        self.max_sessions = max_sessions
        self._wizards: OrderedDict[str, SurveyWizard] = OrderedDict()

    def get(self, session_id: Optional[str]) -> tuple[str, SurveyWizard]:
        if session_id and session_id in self._wizards:
            self._wizards.move_to_end(session_id)
            return session_id, self._wizards[session_id]
        session_id = secrets.token_urlsafe(16)
        wizard = SurveyWizard(self.survey, gateway=StoreSubmissionGateway())
        self._wizards[session_id] = wizard
        while len(self._wizards) > self.max_sessions:
            evicted, _ = self._wizards.popitem(last=False)
            logger.debug("evicted wizard session %s", evicted)
        return session_id, wizard

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._wizards

    def __len__(self) -> int:
        return len(self._wizards)


_PAGE_STYLE = """
  body { font-family: system-ui, sans-serif; margin: 0; min-height: 100vh; color: #fff;
         background: linear-gradient(#0f172a, #1e293b); display: flex; justify-content: center; }
  .wrap { width: 100%; max-width: 720px; padding: 32px 16px; }
  .card { padding: 32px; border-radius: 24px; background: rgba(255,255,255,.06);
          border: 1px solid rgba(255,255,255,.1); }
  header { display: flex; justify-content: space-between; gap: 24px; margin-bottom: 24px; }
  h1 { font-size: 24px; margin: 0; }
  h2 { font-size: 20px; margin: 0; }
  .muted { color: rgba(255,255,255,.7); font-size: 14px; }
  .progress { width: 160px; text-align: right; font-size: 12px; }
  .bar { height: 8px; border-radius: 999px; background: rgba(255,255,255,.3); overflow: hidden; margin: 6px 0; }
  .bar div { height: 100%; background: linear-gradient(90deg,#7c3aed,#06b6d4); }
  .qhead { display: flex; justify-content: space-between; align-items: center; margin-bottom: 16px; }
  .field { width: 100%; box-sizing: border-box; padding: 12px; border-radius: 12px; color: #fff;
           background: rgba(255,255,255,.05); border: 1px solid rgba(255,255,255,.1); }
  .options { display: grid; gap: 12px; }
  .option { display: flex; align-items: center; gap: 12px; padding: 12px; border-radius: 12px;
            background: rgba(255,255,255,.03); }
  .option.selected { background: rgba(255,255,255,.08); }
  .option .toggle { margin-left: auto; font-size: 12px; }
  .error { color: #fda4af; font-size: 12px; margin-top: 12px; }
  .notice { color: #86efac; font-size: 14px; margin-bottom: 16px; }
  .actions { display: flex; justify-content: space-between; margin-top: 24px; gap: 12px; }
  button { padding: 8px 16px; border-radius: 12px; border: 1px solid rgba(255,255,255,.2);
           background: transparent; color: #fff; cursor: pointer; }
  button.primary { background: linear-gradient(90deg,#7c3aed,#22d3ee); color: #000; font-weight: 600; }
  button.submit { background: linear-gradient(90deg,#4ade80,#10b981); color: #000; font-weight: 600; }
  button:disabled { opacity: .4; cursor: not-allowed; }
  .item { display: flex; justify-content: space-between; gap: 16px; padding: 12px; border-radius: 12px;
          background: rgba(255,255,255,.04); margin-bottom: 12px; }
  .jump { display: flex; justify-content: center; gap: 8px; margin-top: 16px; }
  .jump button { padding: 4px 8px; font-size: 12px; }
  .jump button.current { background: rgba(255,255,255,.12); }
"""


def _question_card(wizard: SurveyWizard) -> str:
    q = wizard.current_question
    description = f"<p class='muted'>{escape(q.description)}</p>" if q.description else ""
    error = f"<div class='error'>{escape(wizard.validation_error)}</div>" if wizard.validation_error else ""
    next_label = "Review &amp; Submit" if wizard.is_last else "Next &rarr;"
    prev_disabled = " disabled" if wizard.is_first else ""
    return f"""
      <div class='qhead'>
        <div><h2>{escape(q.title)}</h2>{description}</div>
        <div class='muted'>Step {wizard.current_index + 1} of {wizard.total}</div>
      </div>
      <button type='submit' name='action' value='next' hidden></button>
      {render_control(q, wizard.value(q))}
      {error}
      <div class='actions'>
        <button type='submit' name='action' value='prev'{prev_disabled}>&larr; Previous</button>
        <div>
          <button type='submit' name='action' value='preview'>Preview</button>
          <button type='submit' name='action' value='next' class='primary'>{next_label}</button>
        </div>
      </div>
    """


def _preview_card(wizard: SurveyWizard) -> str:
    rows = "".join(
        f"<div class='item'>"
        f"<div><div>{escape(item.title)}</div><div class='muted'>{escape(item.display)}</div></div>"
        f"<div><button type='submit' name='action' value='jump:{item.index}'>Edit</button></div>"
        f"</div>"
        for item in wizard.preview()
    )
    error = f"<div class='error'>{escape(wizard.validation_error)}</div>" if wizard.validation_error else ""
    notice = "<div class='notice'>Survey submitted! &#9989;</div>" if wizard.last_submission else ""
    return f"""
      {notice}
      <div class='qhead'>
        <div>
          <h2>Preview your answers</h2>
          <p class='muted'>Review before you submit. Click Edit to jump back to a question.</p>
        </div>
        <div class='muted'>{wizard.answered_count()} answered</div>
      </div>
      {rows}
      {error}
      <div class='actions'>
        <button type='submit' name='action' value='back'>Back to questions</button>
        <div>
          <button type='submit' name='action' value='edit-last'>Edit last</button>
          <button type='submit' name='action' value='submit' class='submit'>Submit survey</button>
        </div>
      </div>
    """


def render_wizard_page(wizard: SurveyWizard) -> str:
    survey = wizard.survey
    body = _preview_card(wizard) if wizard.reviewing else _question_card(wizard)
    jumps = "".join(
        f"<button type='submit' name='action' value='jump:{i}'"
        f"{' class=current' if i == wizard.current_index and not wizard.reviewing else ''}>{i + 1}</button>"
        for i in range(wizard.total)
    )
    progress = wizard.progress
    return f"""
    <html>
      <head>
        <meta charset='utf-8' />
        <title>{escape(survey.title)}</title>
        <style>{_PAGE_STYLE}</style>
      </head>
      <body>
        <div class='wrap'>
          <form method='post' action='/wizard'>
            <div class='card'>
              <header>
                <div>
                  <h1>{escape(survey.title)}</h1>
                  <p class='muted'>{escape(survey.description or '')}</p>
                </div>
                <div class='progress'>
                  <div class='muted'>Progress</div>
                  <div class='bar'><div style='width: {progress}%'></div></div>
                  <div class='muted'>{progress}%</div>
                </div>
              </header>
              {body}
            </div>
            <div class='jump'>{jumps}</div>
          </form>
        </div>
      </body>
    </html>
    """


async def apply_action(wizard: SurveyWizard, action: str, submitted: Optional[list[str]]) -> None:
    """Record the posted answer for the current question, then run ``action``."""
    q = wizard.current_question
    if not wizard.reviewing and submitted is not None:
        wizard.set_answer(q.id, read_control(q, submitted, wizard.value(q)))

    if action.startswith("toggle:"):
        option = action.split(":", 1)[1]
        if not wizard.reviewing and q.kind == "multi-choice" and option in (q.options or []):
            wizard.set_answer(q.id, toggle_option(wizard.value(q), option))
    elif action == "next":
        wizard.next()
    elif action == "prev":
        wizard.prev()
    elif action == "preview":
        wizard.request_review()
    elif action == "back":
        wizard.back_to_questions()
    elif action == "edit-last":
        wizard.edit_last()
    elif action == "submit":
        await wizard.submit()
    elif action.startswith("jump:"):
        try:
            index = int(action.split(":", 1)[1])
        except ValueError:
            return
        if 0 <= index < wizard.total:
            wizard.jump_to(index)
    else:
        logger.debug("ignoring unknown wizard action %r", action)


def create_app(settings: Optional[Settings] = None, survey: Optional[SurveySpec] = None) -> FastAPI:
    settings = settings or Settings()
    survey = survey or load_survey(settings.survey_key, settings.surveys_dir)
    configure_engine(settings.database_url)
    sessions = WizardSessions(survey, max_sessions=settings.max_sessions)

    app = FastAPI(title="Survey Wizard", version="0.1.0")
    app.state.sessions = sessions
    app.state.survey = survey
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        init_db()

    @app.get("/api/health")
    def health() -> dict[str, str]:  # type: ignore[no-untyped-def]
        return {"status": "ok"}

    @app.get("/api/survey")
    def get_survey():  # type: ignore[no-untyped-def]
        return survey.to_wire()

    @app.post("/api/submit")
    async def submit(request: Request):  # type: ignore[no-untyped-def]
        try:
            body = await request.json()
        except ValueError:
            body = None
        survey_id = body.get("surveyId") if isinstance(body, dict) else None
        if not survey_id or "answers" not in body:
            return JSONResponse({"error": "surveyId and answers are required"}, status_code=400)
        try:
            row = record_response(str(survey_id), body["answers"])
        except SQLAlchemyError:
            logger.exception("submit error")
            return JSONResponse({"error": "server error"}, status_code=500)
        return {"ok": True, "data": row.to_dict()}

    @app.get("/api/responses")
    def responses():  # type: ignore[no-untyped-def]
        try:
            rows = list_responses()
        except SQLAlchemyError:
            logger.exception("responses error")
            return JSONResponse({"error": "server error"}, status_code=500)
        return [r.to_dict() for r in rows]

    @app.get("/", response_class=HTMLResponse)
    def wizard_page(request: Request):  # type: ignore[no-untyped-def]
        session_id, wizard = sessions.get(request.cookies.get(SESSION_COOKIE))
        response = HTMLResponse(render_wizard_page(wizard))
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
        return response

    @app.post("/wizard")
    async def wizard_action(request: Request):  # type: ignore[no-untyped-def]
        session_id, wizard = sessions.get(request.cookies.get(SESSION_COOKIE))
        form = await request.form()
        action = str(form.get("action") or "next")
        # unchecked checkboxes post nothing, so a multi-choice form always counts
        answer_posted = "answer" in form or wizard.current_question.kind == "multi-choice"
        submitted = [str(v) for v in form.getlist("answer")] if answer_posted else None
        await apply_action(wizard, action, submitted)
        response = RedirectResponse(url="/", status_code=303)
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
        return response

    frontend_dir = settings.frontend_dir
    if frontend_dir and frontend_dir.is_dir():
        logger.info("Serving frontend from %s", frontend_dir)
        app.mount("/app", StaticFiles(directory=str(frontend_dir), html=True), name="frontend")

    return app
