from fastapi import APIRouter, FastAPI

from services.config import get_config_for_service
from services.framework.helpers import (
    make_endpoint,
    openapi_path_parameters,
    resolve_handler,
)
from services.framework.logging import log_event
from services.framework.tracing import tracing_middleware


def create_microservice(service_name: str, get_db=None, lifespan=None) -> FastAPI:
    """
    Build a FastAPI microservice dynamically from config.yaml
    """

    service = get_config_for_service(service_name)

    app = FastAPI(
        title=service.title,
        description=service.description or f"{service.name} service",
        version=service.version,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    router = APIRouter()

    # Register all routes listed under this service config
    for route in service.routes:

        handler_fn = resolve_handler(route.handler)
        endpoint = make_endpoint(route, handler_fn, get_db)

        extra = {}
        if route.status_code:
            extra["status_code"] = route.status_code
        if route.responses:
            extra["responses"] = route.responses
        parameters = openapi_path_parameters(route)
        if parameters:
            extra["openapi_extra"] = {"parameters": parameters}

        router.add_api_route(
            route.path,
            endpoint,
            methods=[route.method.upper()],
            response_model=route.response_model,
            summary=route.summary,
            description=route.description,
            tags=route.tags or [service.name],
            name=handler_fn.__name__,
            **extra,
        )

        log_event(
            "startup",
            action="route_registration",
            service_name=service_name,
            method=route.method.upper(),
            path=route.path,
            handler=route.handler,
        )

    app.include_router(router)
    app.middleware("http")(tracing_middleware)

    @app.get("/", include_in_schema=False)
    async def index():
        return service.title

    @app.get("/healthz")
    async def health():
        return {"status": "ok"}

    return app
