from typing import Dict, Iterable, Optional, Tuple
from bot.exceptions import UnknownViewerProfile
from bot.models import PublicIdentity, User
from utils.logger import setup_logger


def build_user_index(users: Iterable[User]) -> Dict[str, PublicIdentity]:
    """Индекс steamid -> публичные поля пользователя (имя и аватар)"""
    return {
        user.steamid: PublicIdentity(steamid=user.steamid, name=user.name, avatar=user.avatar)
        for user in users
    }


class UserDirectory:
    """Справочник пользователей поверх коллекции документов (pymongo Collection)"""

    def __init__(self, collection):
        self.collection = collection
        self.logger = setup_logger("UserDirectory")

    def find_all(self) -> list:
        users = []
        for doc in self.collection.find({}):
            if not doc.get("steamid"):
                self.logger.warning(f"Skipping directory record without steamid: {doc.get('_id', doc)}")
                continue
            users.append(User.from_document(doc))
        return users

    def find_one(self, steamid: str) -> Optional[User]:
        doc = self.collection.find_one({"steamid": steamid})
        return User.from_document(doc) if doc else None

    def get_profile(self, steamid: str) -> Dict:
        """Профиль текущего пользователя: имя, аватар, баланс"""
        user = self.find_one(steamid)
        if user is None:
            self.logger.error(f"Authenticated account {steamid} has no directory record")
            raise UnknownViewerProfile(steamid)
        return {"name": user.name, "avatar": user.avatar, "credit": user.credit}

    def upsert_identity(self, steamid: str, name: str, avatar: str) -> Tuple[User, bool]:
        """
        Вызывается после успешного входа через Steam.
        Возвращает (пользователь, была ли запись в базу).
        Баланс и trade url существующего пользователя не трогаются.
        """
        user = self.find_one(steamid)

        if user is None:
            user = User(steamid=steamid, name=name, avatar=avatar, credit=0, trade_url="")
            self.collection.insert_one(user.to_document())
            self.logger.info(f"Created directory record for {steamid}")
            return user, True

        if user.name == name and user.avatar == avatar:
            return user, False

        self.collection.update_one(
            {"steamid": steamid},
            {"$set": {"name": name, "avatar": avatar}},
        )
        user.name = name
        user.avatar = avatar
        self.logger.info(f"Refreshed name/avatar for {steamid}")
        return user, True
