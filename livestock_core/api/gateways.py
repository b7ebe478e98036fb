"""
Resource Gateways
Map domain operations (list, get, create, update, delete) onto REST calls
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from livestock_core.logging import get_logger

from .http_client import ApiClient

logger = get_logger(__name__)

# Backend collections served with the uniform verb mapping
RESOURCES: Tuple[str, ...] = ("animals", "owners", "events", "inventory", "reports")


class ResourceGateway:
    """
    REST mapping for one backend collection.

        GET    /{resource}/        list (query params as filters)
        GET    /{resource}/{id}/   get
        POST   /{resource}/        create
        PUT    /{resource}/{id}/   update
        PATCH  /{resource}/{id}/   partial_update
        DELETE /{resource}/{id}/   delete
    """

    def __init__(self, client: ApiClient, resource: str):
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource '{resource}'. Available: {list(RESOURCES)}")
        self.client = client
        self.resource = resource

    def __repr__(self) -> str:
        return f"ResourceGateway({self.resource!r})"

    def _collection_path(self) -> str:
        return f"{self.resource}/"

    def _item_path(self, entity_id: Any) -> str:
        return f"{self.resource}/{entity_id}/"

    def list(self, params: Optional[Dict[str, Any]] = None) -> Any:
        """Return the raw list body: a bare collection or a {"results": [...]} envelope"""
        clean = {k: v for k, v in (params or {}).items() if v not in (None, "")}
        return self.client.get(self._collection_path(), params=clean or None)

    def get(self, entity_id: Any) -> Any:
        return self.client.get(self._item_path(entity_id))

    def create(self, data: Dict[str, Any]) -> Any:
        return self.client.post(self._collection_path(), json=data)

    def update(self, entity_id: Any, data: Dict[str, Any]) -> Any:
        return self.client.put(self._item_path(entity_id), json=data)

    def partial_update(self, entity_id: Any, data: Dict[str, Any]) -> Any:
        return self.client.patch(self._item_path(entity_id), json=data)

    def delete(self, entity_id: Any) -> None:
        self.client.delete(self._item_path(entity_id))


def create_gateways(
    client: ApiClient,
    resources: Iterable[str] = RESOURCES,
) -> Dict[str, ResourceGateway]:
    """Build one gateway per resource name sharing a single client"""
    return {name: ResourceGateway(client, name) for name in resources}


class AuthGateway:
    """REST mapping for the authentication and profile endpoints"""

    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, credentials: Dict[str, Any]) -> Any:
        return self.client.post("auth/login/", json=credentials)

    def register(self, user_data: Dict[str, Any]) -> Any:
        return self.client.post("auth/register/", json=user_data)

    def logout(self, refresh_token: str) -> Any:
        return self.client.post("auth/logout/", json={"refresh_token": refresh_token})

    def refresh_token(self, refresh_token: str) -> Any:
        return self.client.post("auth/token/refresh/", json={"refresh": refresh_token})

    def get_current_user(self) -> Any:
        return self.client.get("auth/user/")

    def change_password(self, data: Dict[str, Any]) -> Any:
        return self.client.put("auth/change-password/", json=data)

    def get_profile(self) -> Any:
        return self.client.get("auth/profile/")

    def update_profile(
        self,
        data: Dict[str, Any],
        picture: Optional[Tuple[str, Any, str]] = None,
    ) -> Any:
        """
        Update the profile; a picture switches the request to multipart.

        Args:
            data: Profile fields
            picture: Optional (filename, file object or bytes, content type)
        """
        if picture is not None:
            fields = {k: v for k, v in data.items() if v is not None}
            return self.client.patch(
                "auth/profile/update/",
                json=fields,
                files={"profile_picture": picture},
            )
        return self.client.patch("auth/profile/update/", json=data)
