import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from credit_engine.depends import create_tables


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a test database engine on a fresh SQLite file"""
    # A file (not :memory:) so that concurrent sessions get separate connections
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'credits_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)
    await create_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    """Session factory for tests that need several independent sessions"""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session
