import asyncio
from typing import List
from bot.exceptions import ProviderUnavailable
from bot.models import AppContext, InventoryItem, Offer, OfferRole, OfferRow
from utils.logger import setup_logger
from .directory import UserDirectory, build_user_index
from .ledger import OfferLedger


class OfferReconciler:
    """
    Сводит три независимых источника в ответ для одного пользователя:
    журнал офферов, снапшот инвентаря бота и справочник пользователей.

    Снапшот запрашивается заново на каждый вызов. Ошибка провайдера
    обрывает весь ответ; отсутствующий продавец или устаревший assetid
    портят только свою строку и пишутся в лог.
    """

    def __init__(self, ledger: OfferLedger, directory: UserDirectory, provider,
                 app_context: AppContext, provider_timeout: float = 15):
        self.ledger = ledger
        self.directory = directory
        self.provider = provider
        self.app_context = app_context
        self.provider_timeout = provider_timeout
        self.logger = setup_logger("OfferReconciler")

    async def reconcile_offers(self, viewer_id: str, role: OfferRole) -> List[OfferRow]:
        offers, snapshot, users = await asyncio.gather(
            asyncio.to_thread(self.ledger.find_for_role, viewer_id, role),
            self._fetch_snapshot(),
            asyncio.to_thread(self.directory.find_all),
        )

        inventory = [item.with_default_descriptions() for item in snapshot]
        index = build_user_index(users)

        return [self._build_row(offer, viewer_id, inventory, index) for offer in offers]

    async def _fetch_snapshot(self) -> List[InventoryItem]:
        try:
            snapshot = await asyncio.wait_for(
                asyncio.to_thread(self.provider.get_snapshot, self.app_context),
                timeout=self.provider_timeout,
            )
        except asyncio.TimeoutError:
            self.logger.error(f"Inventory snapshot timed out after {self.provider_timeout}s")
            raise ProviderUnavailable("Inventory snapshot timed out")
        except ProviderUnavailable:
            raise
        except Exception as e:
            self.logger.error(f"Inventory snapshot failed: {e}")
            raise ProviderUnavailable(str(e)) from e

        if snapshot is None:
            self.logger.error("Inventory snapshot is indeterminate")
            raise ProviderUnavailable("Inventory snapshot is indeterminate")
        return snapshot

    def _build_row(self, offer: Offer, viewer_id: str, inventory: List[InventoryItem], index: dict) -> OfferRow:
        owner = index.get(offer.owner_id)
        if owner is None:
            self.logger.warning(f"Offer {offer.id}: seller {offer.owner_id} is missing from the directory")

        wanted = set(offer.items)
        items = [item for item in inventory if item.assetid in wanted]
        stale = wanted - {item.assetid for item in items}
        if stale:
            self.logger.warning(f"Offer {offer.id}: assets not in bot inventory: {sorted(stale)}")

        return OfferRow(
            id=offer.id,
            is_mine=offer.owner_id == viewer_id,
            is_buyer=offer.buyer_id == viewer_id,
            # Всегда продавец, даже когда смотрит сам продавец
            owner=owner,
            buyer_id=offer.buyer_id,
            trade_id=offer.trade_id,
            price=offer.price,
            items=items,
            date=offer.date,
            status=offer.status,
        )
