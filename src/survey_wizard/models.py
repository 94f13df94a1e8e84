from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SurveyResponse(SQLModel, table=True):
    __tablename__ = "responses"

    id: Optional[int] = Field(default=None, primary_key=True)
    survey_id: str = Field(index=True, nullable=False)
    # JSON blob with the wizard's answer snapshot
    answers: str = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "survey_id": self.survey_id,
            "answers": json.loads(self.answers) if self.answers else None,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        }
