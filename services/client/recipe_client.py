from typing import List, Optional

import httpx

from services.config import get_config_for_service
from services.framework.logging import current_trace_id, log_event
from services.framework.tracing import TRACE_ID_HEADER
from services.shared.schemas import recipe as rs


class RecipeClient:
    """
    Typed client for the recipes service.

    Any httpx.Client can be passed in (e.g. a FastAPI TestClient); otherwise
    one is created for `base_url`, defaulting to the service url in config.yaml.
    Non-2xx responses raise httpx.HTTPStatusError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        if client is None:
            base_url = base_url or get_config_for_service("recipes").url
            client = httpx.Client(base_url=base_url, timeout=timeout)
        self.client = client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, tb):
        self.close()

    def close(self):
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = {TRACE_ID_HEADER: current_trace_id.get()}
        response = self.client.request(method, path, headers=headers, **kwargs)
        log_event(
            "client_request",
            method=method,
            path=path,
            status=response.status_code,
        )
        return response

    def create_recipe(self, command: rs.CreateRecipeCommand) -> int:
        response = self._request("POST", "/recipe", json=command.model_dump(mode="json"))
        response.raise_for_status()
        return response.json()

    def list_recipes(self) -> List[rs.RecipeSummaryViewModel]:
        response = self._request("GET", "/recipe")
        response.raise_for_status()
        return [rs.RecipeSummaryViewModel.model_validate(r) for r in response.json()]

    def get_recipe(self, recipe_id: int) -> rs.RecipeDetailViewModel:
        response = self._request("GET", f"/recipe/{recipe_id}")
        response.raise_for_status()
        return rs.RecipeDetailViewModel.model_validate(response.json())

    def update_recipe(self, command: rs.UpdateRecipeCommand) -> rs.RecipeDetailViewModel:
        # fields left out must stay out, not be sent as explicit nulls
        body = command.model_dump(mode="json", exclude_none=True)
        response = self._request("PUT", "/recipe", json=body)
        response.raise_for_status()
        return rs.RecipeDetailViewModel.model_validate(response.json())

    def delete_recipe(self, recipe_id: int) -> bool:
        """
        Returns False when the service reports the recipe as not found.
        """
        response = self._request("DELETE", f"/recipe/{recipe_id}")
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return response.json()["success"]
