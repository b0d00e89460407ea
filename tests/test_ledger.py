from conftest import FakeCollection

from bot.models import OfferRole
from market.ledger import OfferLedger

DOCS = [
    {"id": "o1", "owner_id": "A", "buyer_id": "B", "items": ["1"], "price": 10, "status": 1},
    {"id": "o2", "owner_id": "B", "buyer_id": "A", "items": [2], "price": 3, "status": 7},
    {"id": "o3", "owner_id": "A", "buyer_id": "C", "items": [], "price": 8, "status": 0},
    {"id": "o4", "owner_id": "A", "buyer_id": "A", "items": ["4"], "price": 1, "status": 2},
]


def test_seller_role_filters_on_owner():
    ledger = OfferLedger(FakeCollection(DOCS))
    offers = ledger.find_for_role("A", OfferRole.SELLER)
    assert [offer.id for offer in offers] == ["o1", "o3", "o4"]
    assert all(offer.owner_id == "A" for offer in offers)


def test_buyer_role_filters_on_buyer():
    ledger = OfferLedger(FakeCollection(DOCS))
    offers = ledger.find_for_role("A", OfferRole.BUYER)
    assert [offer.id for offer in offers] == ["o2", "o4"]


def test_role_accepts_plain_string():
    ledger = OfferLedger(FakeCollection(DOCS))
    assert [offer.id for offer in ledger.find_for_role("B", "buyer")] == ["o1"]


def test_offer_fields_round_trip():
    ledger = OfferLedger(FakeCollection(DOCS))
    offer = ledger.find_for_role("B", OfferRole.SELLER)[0]
    # assetid всегда строка, status отдается без изменений
    assert offer.items == ["2"]
    assert offer.status == 7
    assert offer.trade_id is None


def test_records_without_id_are_skipped():
    docs = [{"owner_id": "A", "buyer_id": "B", "items": []}] + DOCS
    ledger = OfferLedger(FakeCollection(docs))
    assert [offer.id for offer in ledger.find_for_role("A", OfferRole.SELLER)] == ["o1", "o3", "o4"]
