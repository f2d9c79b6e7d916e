"""Demo data for empty databases."""
import logging
import random
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Game, Tournament
from app.repositories import UnitOfWork
from app.utils.date_helpers import tournament_end_date, utcnow

logger = logging.getLogger(__name__)

TOURNAMENT_NAMES = [
    "Spring Open", "Summer Cup", "Autumn Classic", "Winter Invitational",
    "City Championship", "Regional Masters", "Coastal Challenge", "Northern League",
]
GAME_NAMES = [
    "Opening Match", "Group Stage", "Quarterfinal", "Semifinal", "Final",
    "Exhibition", "Derby", "Rematch", "Showcase",
]


def build_tournament(rng: random.Random) -> Tournament:
    """Random tournament with 1 to 5 games inside its window."""
    today = utcnow().replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
    start_date = today + timedelta(days=rng.randint(-30, 60))
    window_minutes = int((tournament_end_date(start_date) - start_date).total_seconds() // 60)

    tournament = Tournament(
        title=f"{rng.choice(TOURNAMENT_NAMES)} {start_date.year}",
        start_date=start_date,
    )
    titles = rng.sample(GAME_NAMES, rng.randint(1, 5))
    tournament.games = [
        Game(title=title, time=start_date + timedelta(minutes=rng.randint(0, window_minutes)))
        for title in titles
    ]
    return tournament


async def seed_data(session: AsyncSession, count: int = 4, rng: random.Random | None = None) -> int:
    """Insert ``count`` tournaments unless any already exist. Returns rows written."""
    uow = UnitOfWork(session)
    if await uow.tournaments.has_any():
        logger.info("Skipping seed: tournaments already present")
        return 0

    rng = rng or random.Random()
    for _ in range(count):
        uow.tournaments.add(build_tournament(rng))

    written = await uow.complete()
    logger.info("Seeded %s tournaments (%s rows)", count, written)
    return written
