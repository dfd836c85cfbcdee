"""Shared fixtures: a seeded SQLite database for sync and async sessions."""

from datetime import datetime

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sqlpaginate.config import get_settings
from tests.database import Base, SessionLocal, engine
from tests.models import Person, PersonDetail

PERSON_IDS = list(range(1, 11))


def person_rows() -> list[dict]:
    """Ten people who signed up monthly from April 1986 to January 1987."""
    rows = []
    for i, person_id in enumerate(PERSON_IDS):
        month_index = 3 + i
        rows.append(
            {
                "id": person_id,
                "name": f"name-{person_id}",
                "email": f"email-{person_id}",
                "signup_date": datetime(1986 + month_index // 12, month_index % 12 + 1, 26, 2, 20),
            }
        )
    return rows


def person_detail_rows() -> list[dict]:
    """Two city rows for every even person id."""
    return [
        {"person_id": person_id, "city_id": city_id}
        for person_id in PERSON_IDS
        if person_id % 2 == 0
        for city_id in (1, 2)
    ]


@pytest.fixture
def db_session():
    """Session on a freshly seeded database."""
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(insert(Person), person_rows())
        conn.execute(insert(PersonDetail), person_detail_rows())

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
async def async_session():
    """AsyncSession on a separate, freshly seeded in-memory database."""
    async_engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(insert(Person), person_rows())
        await conn.execute(insert(PersonDetail), person_detail_rows())

    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await async_engine.dispose()


@pytest.fixture
def camel_case_settings(monkeypatch):
    """Switch the configured key style to camelCase for one test."""
    monkeypatch.setenv("SQLPAGINATE_KEY_STYLE", "camel")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
