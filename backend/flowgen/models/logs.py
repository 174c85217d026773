"""Run log model definition."""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db

LOG_SOURCES = ("generate", "persist")


class RunLog(db.Model):
    """Summary entries for generation sessions and persistence decisions."""

    __tablename__ = "run_logs"

    id = db.Column(db.Integer, primary_key=True)
    source = db.Column(db.Enum(*LOG_SOURCES, name="runlog_source"), nullable=False)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime, default=lambda: datetime.now(timezone.utc), nullable=False
    )

    def __repr__(self) -> str:  # pragma: no cover - repr not critical for tests
        return f"<RunLog {self.id} from {self.source}>"


def persist_run_log(source: str, message: str) -> None:
    """Persist a run log entry and suppress database errors."""

    if not message:
        return

    try:
        entry = RunLog(source=source, message=message)
        db.session.add(entry)
        db.session.commit()
    except Exception:
        db.session.rollback()
