import secrets

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import Settings, get_settings
from .middleware import track

# auto_error=False so a missing header gets the same 401 + realm as bad credentials
basic_scheme = HTTPBasic(realm="Restricted", auto_error=False)

router = APIRouter(prefix="/xxx", tags=["admin"])


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": 'Basic realm="Restricted"'},
    )


def require_basic_auth(
    credentials: HTTPBasicCredentials | None = Depends(basic_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    """Accept only the single configured username/password pair."""
    if credentials is None:
        raise _unauthorized()

    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.basic_auth_username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), settings.basic_auth_password.encode("utf-8")
    )
    if not (username_ok and password_ok):
        raise _unauthorized()
    return credentials.username


@router.get("/users", response_class=PlainTextResponse, dependencies=[Depends(require_basic_auth), Depends(track)])
async def admin_users():
    return "/admin/users"
