import importlib
import inspect

from fastapi import Body, Depends, HTTPException, Request

from services.framework.logging import Span


def coerce_path_params(route, request: Request) -> list:
    """
    Convert raw path parameter strings to the types declared for the route
    in config.yaml. Undeclared parameters are passed through as strings.
    """
    values = []
    for name, raw in request.path_params.items():
        param = route.path_params.get(name)
        if param is None:
            values.append(raw)
            continue
        try:
            values.append(param.resolve_type()(raw))
        except ValueError:
            raise HTTPException(
                status_code=422,
                detail=[
                    {
                        "loc": ["path", name],
                        "msg": f"value is not a valid {param.type}",
                        "input": raw,
                    }
                ],
            )
    return values


async def _run(handler_fn, args):
    """
    Helper to run a handler function that may or may not be a coroutine.
    """
    with Span(handler_fn.__name__):
        res = handler_fn(*args)
        return await res if inspect.isawaitable(res) else res


def resolve_handler(handler_path: str):
    """
    Resolve a handler function from a string path, e.g. "services.recipes.crud.get_recipe".
    """
    module_name, func_name = handler_path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, func_name)


def bind_arguments(route, request, data, db) -> list:
    """
    Build the positional argument list handlers are called with:
    path params (in path order), then the request body, then the db session.
    """
    args = coerce_path_params(route, request)

    if data is not None:
        args.append(data)

    if db is not None:
        args.append(db)

    return args


def build_body_handler(route, handler_fn, get_db):
    """
    Helper to build an endpoint for routes that expect a request body.
    FastAPI validates the body against the route's request model before
    the handler is called.
    """
    request_model = route.request_model

    async def endpoint(
        request: Request,
        data: request_model = Body(..., embed=False),
        db=Depends(get_db) if get_db else None,
    ):
        return await _run(handler_fn, bind_arguments(route, request, data, db))

    return endpoint


def build_param_handler(route, handler_fn, get_db):
    """
    Helper to build an endpoint for routes that do not expect a request body.
    """

    async def endpoint(
        request: Request,
        db=Depends(get_db) if get_db else None,
    ):
        return await _run(handler_fn, bind_arguments(route, request, None, db))

    return endpoint


def make_endpoint(route, handler_fn, get_db=None):
    """
    Helper to build an endpoint for a given route.
    """
    if route.request_model:
        endpoint = build_body_handler(route, handler_fn, get_db)
    else:
        endpoint = build_param_handler(route, handler_fn, get_db)

    endpoint.__name__ = handler_fn.__name__
    return endpoint


def openapi_path_parameters(route) -> list:
    """
    OpenAPI parameter objects for the route's declared path params; the
    generated endpoints do not name them in their signatures.
    """
    openapi_types = {"int": "integer", "str": "string", "float": "number", "bool": "boolean"}
    return [
        {
            "name": name,
            "in": "path",
            "required": True,
            "description": param.description or "",
            "schema": {"type": openapi_types.get(param.type, "string")},
        }
        for name, param in route.path_params.items()
    ]
