"""
# Freet API Client

Async HTTP client for the Freet social endpoints, keeping an `AppState` in sync
with what the server returns.

```python
state = AppState.load("freet-state.json")
async with FreetApiClient(state) as api:
    await api.load_followers("alice")
    await api.submit_with_alert(api.follow("alice", "bob"), "Followed alice.")
```

Error replies (any non-2xx status) raise `ApiError` carrying the status and
the server's `error` payload.
"""

from typing import Any, Awaitable, Dict, List, Optional, TypeVar, Union

import httpx

from freet_social.client.state import AppState
from freet_social.config import settings
from freet_social.managers.logging_manager import get_logger
from freet_social.models.group_tagging_models import ACTION_TARGET_FIELDS, GroupAction

logger = get_logger(prefix="[FreetApiClient]")

T = TypeVar("T")


class ApiError(Exception):
    """Error reply from the Freet API."""

    def __init__(self, status_code: int, error: Any):
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error

    @property
    def message(self) -> str:
        if isinstance(self.error, dict):
            return " ".join(str(value) for value in self.error.values())
        return str(self.error)


class FreetApiClient:
    def __init__(
        self,
        state: AppState,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.state = state
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=settings.API_TIMEOUT_SECONDS,
        )

    async def __aenter__(self) -> "FreetApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            error = payload.get("error") if isinstance(payload, dict) else response.text
            logger.warning("%s %s failed with %d: %s", method, path, response.status_code, error)
            raise ApiError(response.status_code, error)
        return payload

    # Freets

    async def refresh_freets(self) -> List[Dict[str, Any]]:
        """Reload the feed, restricted to `state.filter` when it is set."""
        path = f"/api/users/{self.state.filter}/freets" if self.state.filter else "/api/freets"
        freets = await self._request("GET", path)
        self.state.update_freets(freets)
        return freets

    # Contact information

    async def get_contact_information(self, username: str) -> Dict[str, Any]:
        contact = await self._request("GET", "/api/contactInformationDisplay", params={"username": username})
        self.state.set_contact_information(contact)
        return contact

    async def create_contact_information(
        self,
        username: str,
        contact_information_displayed: Union[bool, str],
        contact_number: str = "",
        contact_email: str = "",
        contact_website: str = "",
        contact_address: str = "",
    ) -> Dict[str, Any]:
        body = {
            "username": username,
            "contactInformationDisplayed": contact_information_displayed,
            "contactNumber": contact_number,
            "contactEmail": contact_email,
            "contactWebsite": contact_website,
            "contactAddress": contact_address,
        }
        result = await self._request("POST", "/api/contactInformationDisplay", json=body)
        self.state.set_contact_information(result["contactInformationDisplay"])
        return result

    async def update_contact_information(self, username: str, **fields: Any) -> Dict[str, Any]:
        """
        Partially update contact information.

        `fields` use the request's camelCase names; pass `"delete"` to clear one.
        """
        result = await self._request("PUT", "/api/contactInformationDisplay", json={"username": username, **fields})
        self.state.set_contact_information(result["contactInformationDisplay"])
        return result

    # Followers

    async def create_follower_view(self, username: str) -> Dict[str, Any]:
        return await self._request("POST", "/api/followers", json={"username": username})

    async def load_followers(self, username: str) -> List[str]:
        result = await self._request("GET", "/api/followers", params={"username": username, "followers": "true"})
        self.state.set_followers(result["followers"])
        return result["followers"]

    async def load_following(self, username: str) -> List[str]:
        result = await self._request("GET", "/api/followers", params={"username": username, "followers": "false"})
        self.state.set_following(result["following"])
        return result["following"]

    async def _update_followers(self, username_of_followed: str, username_of_follower: str, add: str):
        body = {
            "usernameOfFollowed": username_of_followed,
            "usernameOfFollower": username_of_follower,
            "add": add,
        }
        result = await self._request("PUT", "/api/followers", json=body)
        if username_of_follower == self.state.username:
            self.state.set_following(result["usernameOfFollower"]["following"])
        return result

    async def follow(self, username_of_followed: str, username_of_follower: str) -> Dict[str, Any]:
        return await self._update_followers(username_of_followed, username_of_follower, "true")

    async def unfollow(self, username_of_followed: str, username_of_follower: str) -> Dict[str, Any]:
        return await self._update_followers(username_of_followed, username_of_follower, "false")

    # Groups

    async def create_group(self, group_username: str, group_creator_username: str) -> Dict[str, Any]:
        body = {"groupUsername": group_username, "groupCreatorUsername": group_creator_username}
        return await self._request("POST", "/api/groupTagging", json=body)

    async def update_group(self, group_username: str, action: Union[GroupAction, str], target: str) -> Dict[str, Any]:
        action = GroupAction(action)
        body = {"groupUsername": group_username, "action": action.value, ACTION_TARGET_FIELDS[action]: target}
        return await self._request("PUT", "/api/groupTagging", json=body)

    async def get_group(self, group_username: str) -> Dict[str, Any]:
        return await self._request("GET", "/api/groupTagging", params={"groupUsername": group_username})

    async def submit_with_alert(self, request: Awaitable[T], success_message: str) -> Optional[T]:
        """
        Await `request`, raising a success alert, or an error alert carrying the
        server's message if it fails. Returns `None` on failure.
        """
        try:
            result = await request
        except ApiError as e:
            self.state.alert(e.message, "error")
            return None
        self.state.alert(success_message, "success")
        return result
