from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from jose import JWTError, jwt
from config import Config
from bot.exceptions import AuthenticationError
from .directory import UserDirectory


def issue_token(steamid: str, secret_key: str = None, expire_minutes: int = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes or Config.TOKEN_EXPIRE_MINUTES)
    payload = {"steamid": steamid, "exp": expire}
    return jwt.encode(payload, secret_key or Config.TOKEN_SECRET_KEY, algorithm=Config.TOKEN_ALGORITHM)


def verify_token(token: Optional[str], secret_key: str = None) -> str:
    """Возвращает steamid из токена; 401 если токена нет, 403 если он невалиден"""
    if not token:
        raise AuthenticationError(401, "Missing token")
    try:
        payload = jwt.decode(token, secret_key or Config.TOKEN_SECRET_KEY, algorithms=[Config.TOKEN_ALGORITHM])
    except JWTError as e:
        raise AuthenticationError(403, f"Invalid token: {e}")

    steamid = payload.get("steamid")
    if not steamid:
        raise AuthenticationError(403, "Token carries no account id")
    return str(steamid)


def complete_login(directory: UserDirectory, profile: Dict, secret_key: str = None) -> str:
    """
    Завершение входа через Steam: профиль провайдера (steamid, personaname,
    avatarmedium) записывается в справочник, пользователю выдается токен.
    """
    user, _ = directory.upsert_identity(
        str(profile["steamid"]),
        profile.get("personaname", ""),
        profile.get("avatarmedium", ""),
    )
    return issue_token(user.steamid, secret_key)
