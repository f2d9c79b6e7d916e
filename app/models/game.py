from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        UniqueConstraint("tournament_id", "title", "time", name="uq_games_tournament_title_time"),
        Index("ix_games_tournament_time", "tournament_id", "time"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    tournament_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    tournament: Mapped["Tournament"] = relationship("Tournament", back_populates="games")

    def __repr__(self) -> str:
        return f"<Game id={self.id} title={self.title!r} tournament_id={self.tournament_id}>"
