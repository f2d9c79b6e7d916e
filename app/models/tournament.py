from datetime import datetime
from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import tournament_end_date


class Tournament(Base):
    """A tournament with a fixed-length scheduling window.

    Only ``start_date`` is stored; ``end_date`` is derived on every access
    and has no setter.
    """
    __tablename__ = "tournaments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    # Relationships
    games: Mapped[list["Game"]] = relationship(
        "Game",
        back_populates="tournament",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Game.title",
    )

    @property
    def end_date(self) -> datetime:
        return tournament_end_date(self.start_date)

    def __repr__(self) -> str:
        return f"<Tournament id={self.id} title={self.title!r}>"
