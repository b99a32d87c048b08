from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from testcontainers.core.container import DockerContainer  # noqa: E402
from testcontainers.core.waiting_utils import wait_for_logs  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from tests.utils.factories import create_user_factory  # noqa: E402


@pytest.fixture(scope="session")
def postgres_container():
    container = DockerContainer("postgres:16")
    container.with_exposed_ports(5432)
    container.with_env("POSTGRES_USER", "test")
    container.with_env("POSTGRES_PASSWORD", "test")
    container.with_env("POSTGRES_DB", "test")

    container.start()
    wait_for_logs(container, "database system is ready to accept connections", timeout=30)

    yield container
    container.stop()


@pytest.fixture(scope="session")
def test_database_url(postgres_container):
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    user = "test"
    password = "test"
    dbname = "test"

    return f"postgresql://{user}:{password}@{host}:{port}/{dbname}"


@pytest.fixture(scope="session")
def test_engine(test_database_url):
    engine = create_engine(test_database_url)

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="session")
def test_session_local(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(test_session_local):
    session = test_session_local()

    # Keep everything in one rolled-back transaction, but expire loaded
    # objects like a real commit does so core upserts are visible to the ORM.
    def flush_and_expire() -> None:
        session.flush()
        session.expire_all()

    session.commit = flush_and_expire

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
async def test_app(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client


@pytest.fixture
def test_user(db_session):
    return create_user_factory(db_session, email="learner@example.com", tier="standard")


@pytest.fixture
def other_user(db_session):
    return create_user_factory(db_session, email="other@example.com")
