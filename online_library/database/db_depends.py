from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from online_library.database.db import async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed when the response is sent."""
    async with async_session_maker() as session:
        yield session
