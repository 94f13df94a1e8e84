from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from sqlmodel import select

from ..config import DEFAULT_SURVEYS_DIR
from ..db import get_session
from ..models import SurveyResponse
from .schema import SurveySpec


logger = logging.getLogger(__name__)

SURVEYS_DIR = DEFAULT_SURVEYS_DIR


def load_survey(key: str, surveys_dir: Optional[Path] = None) -> SurveySpec:
    path = Path(surveys_dir or SURVEYS_DIR) / f"{key}.json"
    if not path.exists():
        raise FileNotFoundError(f"Survey file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    return SurveySpec.model_validate(data)


def record_response(survey_id: str, answers: Any) -> SurveyResponse:
    with get_session() as session:
        row = SurveyResponse(survey_id=survey_id, answers=json.dumps(answers, ensure_ascii=False))
        session.add(row)
        session.commit()
        session.refresh(row)
    logger.info("Saved response #%s for survey %s", row.id, survey_id)
    return row


def list_responses() -> list[SurveyResponse]:
    with get_session() as session:
        statement = select(SurveyResponse).order_by(
            SurveyResponse.created_at.desc(), SurveyResponse.id.desc()
        )
        return list(session.exec(statement).all())
