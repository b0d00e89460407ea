import secrets
from datetime import datetime, timezone
from typing import Optional
from utils.logger import setup_logger


class SessionStore:
    """
    Серверные сессии в коллекции документов. В cookie лежит только sid,
    steamid зрителя восстанавливается из базы на каждый запрос.
    """

    def __init__(self, collection):
        self.collection = collection
        self.logger = setup_logger("SessionStore")

    def create(self, steamid: str) -> str:
        sid = secrets.token_urlsafe(32)
        self.collection.insert_one({
            "sid": sid,
            "steamid": steamid,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
        self.logger.info(f"Opened session for {steamid}")
        return sid

    def resolve(self, sid: Optional[str]) -> Optional[str]:
        if not sid:
            return None
        doc = self.collection.find_one({"sid": sid})
        return doc.get("steamid") if doc else None
