"""Shared fixtures: in-memory SQLite engine, session factory and repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sqla_basemodel import BaseModelRepository

from .models import Base, Person

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def repo(session_factory) -> BaseModelRepository[Person]:
    return BaseModelRepository(Person, session_factory)


@pytest.fixture
async def seeded(session_factory) -> list[Person]:
    """Seed 5 people aged 10..50."""
    people = [
        Person(
            name=f"Person {i}",
            age=i * 10,
            status="active" if i % 2 == 0 else "archived",
            email=f"p{i}@example.com",
        )
        for i in range(1, 6)
    ]
    async with session_factory() as session:
        session.add_all(people)
        await session.commit()
    return people
