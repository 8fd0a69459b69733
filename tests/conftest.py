import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from services.recipes import models  # noqa: F401  registers tables on Base
from services.recipes.db import Base
from services.recipes.main import app, recipes_db
from services.shared.schemas.ingredient import CreateIngredientCommand
from services.shared.schemas.recipe import CreateRecipeCommand

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def engine():
    # StaticPool so every connection sees the same in-memory database
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_recipes_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[recipes_db] = override_recipes_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def soup_command():
    return CreateRecipeCommand(
        name="Soup",
        time_to_cook_hours=0,
        time_to_cook_minutes=30,
        method="Boil",
        ingredients=[CreateIngredientCommand(name="Water", quantity=1, unit="L")],
    )


@pytest.fixture
def soup_payload():
    return {
        "name": "Soup",
        "time_to_cook_hours": 0,
        "time_to_cook_minutes": 30,
        "method": "Boil",
        "is_vegetarian": True,
        "is_vegan": True,
        "ingredients": [{"name": "Water", "quantity": 1, "unit": "L"}],
    }
