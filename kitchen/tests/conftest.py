import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kitchen.api.api_run import app
from kitchen.infra.database import Base, get_db, init_db
from kitchen.infra.Recipe_Repository import RecipeRepository


@pytest.fixture
def engine():
    # one shared in-memory connection per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_recipe(db):
    """Create a recipe owned by ``owner`` from (ingredient_id, quantity) pairs."""
    def _make(title, requirements=(), owner="alice", categories=(), **fields):
        ids = [i for i, _ in requirements]
        quantities = [q for _, q in requirements]
        return RecipeRepository(db).create(owner, dict(title=title, **fields), ids, quantities, categories)
    return _make
