# db/database.py
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from core.errors import DatabaseError

Base = declarative_base()


class Database:
    """
    Owns the engine and the session factory.
    Created by the app lifespan, disposed on shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        # bound values (password hashes) never end up in exception text or logs
        self.engine = create_async_engine(url, echo=echo, hide_parameters=True)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    async def connect(self) -> None:
        # create_all only sees tables whose models have been imported
        import models.task  # noqa: F401
        import models.user  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise DatabaseError("Error connecting to the database", cause=exc) from exc

    async def disconnect(self) -> None:
        await self.engine.dispose()

    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as session:
            yield session


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async for session in request.app.state.database.session():
        yield session
