"""
# Authentication Dependencies

FastAPI dependencies exposing the authentication capability to the relationship
routes.

Freet keeps the logged-in user in a signed session cookie (Starlette
`SessionMiddleware`); the account subsystem stores the username under
`settings.SESSION_USERNAME_KEY` at login. These routes only ever *read* it:
whether a user is logged in is decided by the `UserLoggedIn` predicate at the
head of each write pipeline, so the dependency itself never rejects a request.

**Usage:**
```python
@router.post("/")
async def create(session_username: Optional[str] = Depends(get_session_username)):
    ...
```

Tests replace it through `app.dependency_overrides[get_session_username]`.
"""

from typing import Optional

from fastapi import Request

from freet_social.config import settings
from freet_social.managers.logging_manager import get_logger

logger = get_logger(prefix="[Auth Dependencies]")


async def get_session_username(request: Request) -> Optional[str]:
    """Username of the logged-in session user, or `None` for anonymous requests."""
    username = request.session.get(settings.SESSION_USERNAME_KEY)
    if not isinstance(username, str) or not username:
        logger.debug("No session user on %s %s", request.method, request.url.path)
        return None
    return username
