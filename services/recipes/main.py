from contextlib import asynccontextmanager

from services.framework.app import create_microservice
from services.framework.logging import log_event
from services.recipes.db import SessionLocal, engine, init_db
from services.shared.lib.db import get_db


def recipes_db():
    yield from get_db(SessionLocal)


@asynccontextmanager
async def lifespan(app):
    init_db()
    log_event(
        "startup",
        action="init_db",
        service_name="recipes",
        db=engine.url.render_as_string(hide_password=True),
    )
    yield


app = create_microservice("recipes", recipes_db, lifespan=lifespan)
