"""JWT helpers and the authenticated-principal dependency."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from asset_server.core.config import Settings, get_settings
from asset_server.schemas import TokenData

security = HTTPBearer(auto_error=False)

CREDENTIALS_ERROR = "Could not validate credentials"


def create_access_token(
    principal_id: str,
    settings: Optional[Settings] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    settings = settings or get_settings()
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": principal_id,
        "iss": settings.security.issuer,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> TokenData:
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            issuer=settings.security.issuer,
        )
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=CREDENTIALS_ERROR) from exc

    principal_id = payload.get("sub")
    if not principal_id or not isinstance(principal_id, str):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=CREDENTIALS_ERROR)
    return TokenData(principal_id=principal_id)


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """The principal id is taken from the verified token only, never from the request body."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=CREDENTIALS_ERROR,
            headers={"WWW-Authenticate": "Bearer"},
        )
    settings: Settings = request.app.state.container.settings
    token_data = decode_access_token(credentials.credentials, settings)
    request.state.principal_id = token_data.principal_id
    return token_data.principal_id
