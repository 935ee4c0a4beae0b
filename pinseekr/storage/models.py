from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pinseekr.storage.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Cup(Base):
    __tablename__ = "cups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    round_results: Mapped[list["CupRoundResult"]] = relationship(
        back_populates="cup", cascade="all, delete-orphan", order_by="CupRoundResult.id"
    )

    __mapper_args__ = {"version_id_col": version}


class CupRoundResult(Base):
    __tablename__ = "cup_round_results"
    __table_args__ = (UniqueConstraint("cup_id", "round_id", name="uq_cup_round_results_cup_round"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    cup_id: Mapped[str] = mapped_column(ForeignKey("cups.id"), nullable=False, index=True)
    round_id: Mapped[str] = mapped_column(String(64), nullable=False)
    game_mode: Mapped[str] = mapped_column(String(32), nullable=False)
    team_a_points: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    team_b_points: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    summary: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    cup: Mapped[Cup] = relationship(back_populates="round_results")
