from typing import List

import pytest
import yaml

from services.config import (
    CONFIG_FILE_ENV,
    ENVIRONMENT_ENV,
    Param,
    environment_config_file,
    get_config,
    get_config_for_service,
    load_model,
    merge_config,
)
from services.shared.schemas.recipe import RecipeSummaryViewModel

BASE = {
    "title": "test-app",
    "version": "0.1",
    "urlPrefix": "/api",
    "services": {
        "recipes": {
            "title": "Recipes",
            "version": "0.1",
            "url": "http://recipes",
            "db": "sqlite:///base.db",
            "routes": [
                {
                    "method": "GET",
                    "path": "/recipe/{recipe_id}",
                    "handler": "services.recipes.crud.get_recipe",
                    "response_model": "services.shared.schemas.recipe.RecipeDetailViewModel",
                    "path_params": {"recipe_id": {"type": "int"}},
                    "responses": {404: "services.shared.schemas.generic.ErrorResponse"},
                    "tags": ["recipe"],
                }
            ],
        }
    },
}


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.delenv(ENVIRONMENT_ENV, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(BASE))
    return path


def test_repository_config_declares_recipes_routes():
    service = get_config_for_service("recipes")

    routes = {(r.method, r.path) for r in service.routes}
    assert routes == {
        ("POST", "/recipe"),
        ("GET", "/recipe"),
        ("GET", "/recipe/{recipe_id}"),
        ("PUT", "/recipe"),
        ("DELETE", "/recipe/{recipe_id}"),
    }


def test_get_config_parses_routes(config_file):
    config = get_config(str(config_file))

    assert config.title == "test-app"
    assert config.logLevel == "INFO"
    assert config.sources == [str(config_file)]

    route = config.services["recipes"].routes[0]
    assert route.path_params["recipe_id"].resolve_type() is int
    assert route.request_model is None
    assert route.response_model.__name__ == "RecipeDetailViewModel"
    assert route.responses[404]["model"].__name__ == "ErrorResponse"


def test_environment_file_overrides_base(config_file):
    env_file = config_file.parent / "config.staging.yaml"
    env_file.write_text(
        yaml.safe_dump({"logLevel": "DEBUG", "services": {"recipes": {"db": "sqlite:///staging.db"}}})
    )

    config = get_config(str(config_file), environment="Staging")

    recipes = config.services["recipes"]
    assert config.logLevel == "DEBUG"
    assert recipes.db == "sqlite:///staging.db"
    # keys the override does not mention come from the base file
    assert recipes.url == "http://recipes"
    assert len(recipes.routes) == 1
    assert config.sources == [str(config_file), str(env_file)]


def test_missing_environment_file_is_optional(config_file):
    config = get_config(str(config_file), environment="production")

    assert config.services["recipes"].db == "sqlite:///base.db"
    assert config.sources == [str(config_file)]


def test_environment_from_env_var(config_file, monkeypatch):
    (config_file.parent / "config.development.yaml").write_text(
        yaml.safe_dump({"title": "dev-app"})
    )
    monkeypatch.setenv(ENVIRONMENT_ENV, "development")

    config = get_config(str(config_file))

    assert config.title == "dev-app"
    assert config.environment == "development"


def test_config_file_from_env_var(config_file, monkeypatch):
    monkeypatch.setenv(CONFIG_FILE_ENV, str(config_file))

    assert get_config().title == "test-app"


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_config(str(tmp_path / "nope.yaml"))


def test_unknown_service_raises():
    with pytest.raises(ValueError):
        get_config_for_service("pricing")


def test_merge_config_is_deep_and_does_not_mutate():
    base = {"a": {"b": 1, "c": 2}, "d": [1, 2]}

    merged = merge_config(base, {"a": {"c": 3}, "d": [9]})

    assert merged == {"a": {"b": 1, "c": 3}, "d": [9]}
    assert base == {"a": {"b": 1, "c": 2}, "d": [1, 2]}


def test_environment_config_file_name():
    assert environment_config_file("/etc/app/config.yaml", "Development") == (
        "/etc/app/config.development.yaml"
    )


def test_load_model():
    assert load_model(None) is None
    assert load_model("int") is int
    assert (
        load_model("services.shared.schemas.recipe.RecipeSummaryViewModel[]")
        == List[RecipeSummaryViewModel]
    )


def test_unsupported_param_type():
    with pytest.raises(ValueError):
        Param(type="uuid").resolve_type()
