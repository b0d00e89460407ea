from typing import List
from bot.models import Offer, OfferRole
from utils.logger import setup_logger

ROLE_FIELDS = {
    OfferRole.SELLER: "owner_id",
    OfferRole.BUYER: "buyer_id",
}


class OfferLedger:
    """Журнал офферов поверх коллекции документов. Только чтение"""

    def __init__(self, collection):
        self.collection = collection
        self.logger = setup_logger("OfferLedger")

    def find_for_role(self, viewer_id: str, role: OfferRole) -> List[Offer]:
        # Порядок естественный (порядок вставки), без сортировки
        query = {ROLE_FIELDS[OfferRole(role)]: viewer_id}
        offers = []
        for doc in self.collection.find(query):
            if not doc.get("id"):
                self.logger.warning(f"Skipping offer record without id: {doc.get('_id', doc)}")
                continue
            offers.append(Offer.from_document(doc))
        return offers
