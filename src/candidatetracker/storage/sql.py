"""
SQLAlchemy-backed candidate repository.

Status changes use a conditional UPDATE on the current status so that two
writers racing on the same candidate cannot both succeed.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pendulum
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    create_engine,
    delete,
    func,
    or_,
    select,
    update,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from ..errors import CandidateNotFound, InvalidTransition, PersistenceError
from ..schemas import Candidate, CandidateAction, CandidateStatus, FitCategory

Base = declarative_base()


class CandidateRow(Base):
    """Candidate table."""

    __tablename__ = "candidates"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    role = Column(String(255), nullable=False)
    fit_score = Column(Integer, nullable=False)
    fit_category = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False, index=True)
    screened_at = Column(DateTime(timezone=True), nullable=False)
    action_comment = Column(Text)
    is_duplicate = Column(Boolean, nullable=False, default=False)
    duplicate_info = Column(Text)
    resume_text = Column(Text)
    job_description = Column(Text)
    screening_summary = Column(Text)
    strengths = Column(JSON, nullable=False, default=list)
    gaps = Column(JSON, nullable=False, default=list)
    recommended_action = Column(String(16))


class CandidateActionRow(Base):
    """Audit trail table. No foreign key: rows outlive deleted candidates."""

    __tablename__ = "candidate_actions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), nullable=False, unique=True)
    candidate_id = Column(String(64), nullable=False, index=True)
    action_type = Column(String(32), nullable=False)
    comment = Column(Text)
    previous_status = Column(String(16))
    new_status = Column(String(16))
    created_at = Column(DateTime(timezone=True), nullable=False)


class SQLAlchemyCandidateRepository:
    """Repository persisting candidates through a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def add(self, candidate: Candidate, action: CandidateAction) -> Candidate:
        try:
            with self._session_factory() as session, session.begin():
                session.add(_candidate_row(candidate))
                session.add(_action_row(action))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to add candidate {candidate.id!r}: {exc}") from exc
        return candidate

    def get(self, candidate_id: str) -> Candidate | None:
        try:
            with self._session_factory() as session:
                row = session.get(CandidateRow, candidate_id)
                return _to_candidate(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load candidate {candidate_id!r}: {exc}") from exc

    def list_candidates(
        self,
        *,
        search: str | None = None,
        fit_category: FitCategory | None = None,
        status: CandidateStatus | None = None,
    ) -> list[Candidate]:
        query = select(CandidateRow)
        term = (search or "").strip().lower()
        if term:
            query = query.where(
                or_(
                    func.lower(CandidateRow.name).contains(term, autoescape=True),
                    func.lower(CandidateRow.role).contains(term, autoescape=True),
                )
            )
        if fit_category is not None:
            query = query.where(CandidateRow.fit_category == FitCategory(fit_category).value)
        if status is not None:
            query = query.where(CandidateRow.status == CandidateStatus(status).value)
        query = query.order_by(CandidateRow.screened_at.desc())
        try:
            with self._session_factory() as session:
                return [_to_candidate(row) for row in session.scalars(query)]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list candidates: {exc}") from exc

    def find_by_email(self, email: str) -> list[Candidate]:
        query = select(CandidateRow).where(
            func.lower(CandidateRow.email) == email.strip().lower()
        )
        try:
            with self._session_factory() as session:
                return [_to_candidate(row) for row in session.scalars(query)]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to query candidates by email: {exc}") from exc

    def apply_transition(
        self,
        candidate_id: str,
        *,
        expected_status: CandidateStatus,
        new_status: CandidateStatus,
        comment: str | None,
        action: CandidateAction,
    ) -> Candidate:
        values: dict[str, object] = {"status": new_status.value}
        if comment is not None:
            values["action_comment"] = comment
        statement = (
            update(CandidateRow)
            .where(
                CandidateRow.id == candidate_id,
                CandidateRow.status == expected_status.value,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            with self._session_factory() as session:
                with session.begin():
                    result = session.execute(statement)
                    if result.rowcount == 0:
                        current = session.get(CandidateRow, candidate_id)
                        if current is None:
                            raise CandidateNotFound(candidate_id)
                        raise InvalidTransition(
                            candidate_id,
                            CandidateStatus(current.status),
                            new_status,
                            reason="status changed concurrently",
                        )
                    session.add(_action_row(action))
                row = session.get(CandidateRow, candidate_id)
                return _to_candidate(row)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to update candidate {candidate_id!r}: {exc}") from exc

    def delete(
        self,
        candidate_id: str,
        action: CandidateAction,
        *,
        expected_status: CandidateStatus,
    ) -> Candidate:
        statement = (
            delete(CandidateRow)
            .where(
                CandidateRow.id == candidate_id,
                CandidateRow.status == expected_status.value,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            with self._session_factory() as session, session.begin():
                row = session.get(CandidateRow, candidate_id)
                if row is None:
                    raise CandidateNotFound(candidate_id)
                removed = _to_candidate(row)
                if removed.status != expected_status or session.execute(statement).rowcount == 0:
                    raise InvalidTransition(
                        candidate_id,
                        removed.status,
                        "deleted",
                        reason="status changed concurrently",
                    )
                session.add(_action_row(action))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to delete candidate {candidate_id!r}: {exc}") from exc
        return removed

    def actions(self, candidate_id: str) -> list[CandidateAction]:
        query = (
            select(CandidateActionRow)
            .where(CandidateActionRow.candidate_id == candidate_id)
            .order_by(CandidateActionRow.seq)
        )
        try:
            with self._session_factory() as session:
                return [_to_action(row) for row in session.scalars(query)]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load audit trail for {candidate_id!r}: {exc}") from exc


def create_sql_repository(url: str, *, echo: bool = False) -> SQLAlchemyCandidateRepository:
    """
    Create tables if needed and return a repository bound to ``url``.

    Args:
        url: SQLAlchemy database URL, e.g. ``sqlite:///data/tracker.db``
        echo: Log emitted SQL

    Returns:
        Repository using a fresh session per operation
    """
    try:
        engine = create_engine(url, echo=echo)
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to initialise database {url!r}: {exc}") from exc
    return SQLAlchemyCandidateRepository(sessionmaker(bind=engine, expire_on_commit=False))


def _utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def _from_db(value: datetime) -> datetime:
    # SQLite drops tzinfo; stored values are always UTC.
    return pendulum.instance(value, tz="UTC")


def _candidate_row(candidate: Candidate) -> CandidateRow:
    return CandidateRow(
        id=candidate.id,
        name=candidate.name,
        email=candidate.email,
        role=candidate.role,
        fit_score=candidate.fit_score,
        fit_category=candidate.fit_category.value,
        status=candidate.status.value,
        screened_at=_utc(candidate.screened_at),
        action_comment=candidate.action_comment,
        is_duplicate=candidate.is_duplicate,
        duplicate_info=candidate.duplicate_info,
        resume_text=candidate.resume_text,
        job_description=candidate.job_description,
        screening_summary=candidate.screening_summary,
        strengths=list(candidate.strengths),
        gaps=list(candidate.gaps),
        recommended_action=(
            candidate.recommended_action.value if candidate.recommended_action else None
        ),
    )


def _to_candidate(row: CandidateRow) -> Candidate:
    return Candidate(
        id=row.id,
        name=row.name,
        email=row.email,
        role=row.role,
        fit_score=row.fit_score,
        fit_category=row.fit_category,
        status=row.status,
        screened_at=_from_db(row.screened_at),
        action_comment=row.action_comment,
        is_duplicate=bool(row.is_duplicate),
        duplicate_info=row.duplicate_info,
        resume_text=row.resume_text,
        job_description=row.job_description,
        screening_summary=row.screening_summary,
        strengths=row.strengths or [],
        gaps=row.gaps or [],
        recommended_action=row.recommended_action,
    )


def _action_row(action: CandidateAction) -> CandidateActionRow:
    return CandidateActionRow(
        id=action.id,
        candidate_id=action.candidate_id,
        action_type=action.action_type.value,
        comment=action.comment,
        previous_status=action.previous_status.value if action.previous_status else None,
        new_status=action.new_status.value if action.new_status else None,
        created_at=_utc(action.created_at),
    )


def _to_action(row: CandidateActionRow) -> CandidateAction:
    return CandidateAction(
        id=row.id,
        candidate_id=row.candidate_id,
        action_type=row.action_type,
        comment=row.comment,
        previous_status=row.previous_status,
        new_status=row.new_status,
        created_at=_from_db(row.created_at),
    )
