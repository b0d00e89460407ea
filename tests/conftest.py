import os
import tempfile
import time
from pathlib import Path

import pytest

os.environ.setdefault("LOGS_DIR", str(Path(tempfile.gettempdir()) / "steam-trade-market-logs"))
os.environ.setdefault("TOKEN_SECRET_KEY", "test-secret")

from bot.exceptions import InventoryError
from bot.models import AppContext, InventoryItem
from market.directory import UserDirectory
from market.ledger import OfferLedger
from market.reconciler import OfferReconciler
from market.sessions import SessionStore


class FakeCollection:
    """Подмножество pymongo Collection, достаточное для справочника и журнала"""

    def __init__(self, docs=None):
        self.docs = [dict(doc) for doc in docs or []]
        self.writes = 0

    @staticmethod
    def _matches(doc, query):
        return all(doc.get(key) == value for key, value in query.items())

    def find(self, query=None):
        return [dict(doc) for doc in self.docs if self._matches(doc, query or {})]

    def find_one(self, query):
        for doc in self.docs:
            if self._matches(doc, query):
                return dict(doc)
        return None

    def insert_one(self, doc):
        self.docs.append(dict(doc))
        self.writes += 1

    def update_one(self, query, update):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update["$set"])
                self.writes += 1
                return


class FakeProvider:
    def __init__(self, items=None, error=None, delay=0.0, returns_none=False):
        self.items = items or []
        self.error = error
        self.delay = delay
        self.returns_none = returns_none
        self.calls = []

    def get_snapshot(self, app_context):
        self.calls.append(app_context)
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        if self.returns_none:
            return None
        return list(self.items)


def make_item(assetid, position=1, descriptions=None):
    return InventoryItem(
        index=position,
        assetid=assetid,
        name=f"Item {assetid}",
        icon_url=f"https://cdn.example/{assetid}/200x200",
        rarity="Mythical",
        color="8847ff",
        descriptions=descriptions if descriptions is not None else [{"type": "html", "value": f"About {assetid}"}],
    )


USERS = [
    {"steamid": "A", "name": "Alice", "avatar": "alice.jpg", "credit": 50, "tradeUrl": "https://trade/a"},
    {"steamid": "B", "name": "Bob", "avatar": "bob.jpg", "credit": 5, "tradeUrl": ""},
]

OFFERS = [
    {"id": "o1", "trade_id": None, "owner_id": "A", "buyer_id": "B", "items": ["x1", "x2"],
     "price": 10, "date": "2021-03-01", "status": 1},
]


@pytest.fixture
def app_context():
    return AppContext(570, 2)


@pytest.fixture
def users_collection():
    return FakeCollection(USERS)


@pytest.fixture
def offers_collection():
    return FakeCollection(OFFERS)


@pytest.fixture
def directory(users_collection):
    return UserDirectory(users_collection)


@pytest.fixture
def ledger(offers_collection):
    return OfferLedger(offers_collection)


@pytest.fixture
def provider():
    return FakeProvider([make_item("x1", 1), make_item("x9", 2)])


@pytest.fixture
def reconciler(ledger, directory, provider, app_context):
    return OfferReconciler(ledger, directory, provider, app_context, provider_timeout=5)


@pytest.fixture
def failing_provider():
    return FakeProvider(error=InventoryError("steam is down"))


@pytest.fixture
def sessions_collection():
    return FakeCollection()


@pytest.fixture
def sessions(sessions_collection):
    return SessionStore(sessions_collection)
