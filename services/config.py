import importlib
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

CONFIG_FILE_ENV = "APP_CONFIG_FILE"
ENVIRONMENT_ENV = "APP_ENV"

# builtin type names allowed for path/query params in config.yaml
PARAM_TYPES = {
    "int": int,
    "str": str,
    "float": float,
    "bool": bool,
}


@dataclass
class Param:
    """
    Represents a typed path or query parameter for a route.
    """

    type: str = "str"  # "int", "str", etc. (resolved with resolve_type)
    default: Any = None
    description: Optional[str] = None

    def resolve_type(self):
        try:
            return PARAM_TYPES[self.type]
        except KeyError:
            raise ValueError(f"Unsupported parameter type '{self.type}'.")


@dataclass
class Route:
    """
    Represents a route in the service.
    """

    method: str
    path: str
    request_model: Optional[Any]
    response_model: Optional[Any]
    handler: str
    path_params: Dict[str, Param]
    summary: Optional[str]
    description: Optional[str]
    tags: List[str]
    status_code: Optional[int] = None
    responses: Dict[int, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class Service:
    """
    Represents a service with its configuration, including routes and database.
    """

    name: str
    version: str
    title: str
    url: str
    db: str
    routes: List[Route]
    description: Optional[str] = None


@dataclass
class Config:
    """
    Represents the entire configuration of the application, including all services.
    """

    urlPrefix: str
    title: str
    version: str
    services: dict[str, Service]
    logLevel: str = "INFO"
    environment: Optional[str] = None
    description: Optional[str] = None
    sources: List[str] = field(default_factory=list)


def load_model(ref: Optional[str]):
    """
    Loads a model class from a string reference.
    Handles optional `List` types by checking for `[]` suffix.
    """
    if not ref:
        return None

    is_list = ref.endswith("[]")
    if is_list:
        ref = ref[:-2]

    if ref in PARAM_TYPES:
        cls = PARAM_TYPES[ref]
    else:
        module_name, class_name = ref.rsplit(".", 1)
        module = importlib.import_module(module_name)
        cls = getattr(module, class_name)

    if is_list:
        return List[cls]

    return cls


def parse_params(data: Optional[dict]) -> Dict[str, Param]:
    """
    Parses a dictionary of parameter configurations into a dictionary of Param objects.
    """
    if not data:
        return {}
    params: Dict[str, Param] = {}
    for name, cfg in data.items():
        params[name] = Param(
            type=cfg.get("type", "str"),
            default=cfg.get("default"),
            description=cfg.get("description"),
        )
    return params


def parse_route(route_data: dict) -> Route:
    """
    Parses a dictionary of route configurations into a Route object.
    """
    return Route(
        method=route_data["method"],
        path=route_data["path"],
        request_model=load_model(route_data.get("request_model")),
        response_model=load_model(route_data.get("response_model")),
        handler=route_data["handler"],
        summary=route_data.get("summary"),
        description=route_data.get("description"),
        tags=route_data.get("tags", []),
        path_params=parse_params(route_data.get("path_params")),
        status_code=route_data.get("status_code"),
        responses={
            int(code): {"model": load_model(ref)}
            for code, ref in (route_data.get("responses") or {}).items()
        },
    )


def parse_service(service_data: dict) -> Service:
    """
    Parses a dictionary of service configurations into a Service object.
    """
    return Service(
        name=service_data["name"],
        title=service_data["title"],
        version=service_data["version"],
        url=service_data["url"],
        db=service_data["db"],
        description=service_data.get("description"),
        routes=[parse_route(route) for route in service_data.get("routes", [])],
    )


def merge_config(base: dict, override: dict) -> dict:
    """
    Deep-merges `override` into a copy of `base`.
    Nested mappings are merged key by key; any other value in `override` wins.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_file() -> str:
    BASE_DIR = os.path.dirname(os.path.dirname(__file__))
    return os.environ.get(CONFIG_FILE_ENV) or os.path.join(BASE_DIR, "config.yaml")


def environment_config_file(config_file: str, environment: str) -> str:
    """
    config.yaml + "development" -> config.development.yaml, in the same directory.
    """
    root, ext = os.path.splitext(config_file)
    return f"{root}.{environment.lower()}{ext}"


def read_yaml(path: str) -> dict:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def get_config_for_service(name: str) -> Service:
    """
    Retrieves the configuration for a specific service by its name.
    """
    svc = get_config().services.get(name)
    if svc:
        return svc
    raise ValueError(f"Service with name {name} not found.")


def get_config(
    config_file: Optional[str] = None, environment: Optional[str] = None
) -> Config:
    """
    Loads and parses the entire application configuration.

    The base file is config.yaml at the repository root unless APP_CONFIG_FILE
    points elsewhere. When an environment is given (or APP_ENV is set), the
    optional config.<environment>.yaml next to it is merged on top.
    """
    config_file = config_file or default_config_file()
    environment = environment or os.environ.get(ENVIRONMENT_ENV)

    raw_config = read_yaml(config_file)
    sources = [config_file]

    if environment:
        env_file = environment_config_file(config_file, environment)
        if os.path.exists(env_file):
            raw_config = merge_config(raw_config, read_yaml(env_file))
            sources.append(env_file)

    services = {
        name: parse_service({"name": name, **data})
        for name, data in raw_config.get("services", {}).items()
    }

    config = Config(
        urlPrefix=raw_config["urlPrefix"],
        title=raw_config["title"],
        version=raw_config["version"],
        description=raw_config.get("description"),
        logLevel=raw_config.get("logLevel", "INFO"),
        environment=environment,
        services=services,
        sources=sources,
    )
    return config
