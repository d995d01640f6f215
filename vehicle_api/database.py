from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from vehicle_api.config import settings

_ASYNC_DRIVER_PREFIXES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
}


class Base(DeclarativeBase):
    pass


def async_database_url(url: str) -> str:
    for prefix, replacement in _ASYNC_DRIVER_PREFIXES.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


def make_engine(url: str, echo: bool = False) -> AsyncEngine:
    url = async_database_url(url)
    options: dict = {"echo": echo}
    # SQLite ships its own pool; server databases get a bounded, pre-pinged one
    if not url.startswith("sqlite"):
        options.update(pool_size=5, max_overflow=10, pool_pre_ping=True)
    return create_async_engine(url, **options)


engine = make_engine(settings.database_url, echo=settings.sql_echo)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables():
    async with engine.begin() as conn:
        from vehicle_api.models import vehicle  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)
