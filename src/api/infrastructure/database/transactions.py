"""Transaction scoping helpers for repositories."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run a block inside a transaction owned by the caller or by this block.

    Repositories call this for every operation. Outside a transaction it
    opens (and commits) one; inside a caller's transaction it opens a
    savepoint so the caller keeps control of the commit.
    """
    if session.in_transaction():
        async with session.begin_nested():
            yield session
    else:
        async with session.begin():
            yield session
