from typing import List, Dict, Optional
from datetime import datetime
from pathlib import Path
import json
import threading
from config import Config
from utils.logger import setup_logger
from .models import AppContext, InventoryItem
from .steam_client import SteamClientWrapper
from .exceptions import ProviderUnavailable

class TradeBot:
    """Бот-посредник: единственный на процесс, создается при старте и живет до выхода"""

    def __init__(self, bot_id: str, steam: SteamClientWrapper, bot_name: str = None,
                 image_cdn: str = None, logs_dir: str = None):
        self.bot_id = bot_id
        self.bot_name = bot_name or f"Bot_{bot_id}"
        self.steam = steam
        self.image_cdn = image_cdn or Config.STEAM_IMAGE_CDN
        self.logs_dir = Path(logs_dir or Config.LOGS_DIR)
        self.last_update: Optional[datetime] = None
        self.logger = setup_logger(self.bot_name)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls) -> "TradeBot":
        steam = SteamClientWrapper(
            Config.STEAM_API_KEY,
            Config.BOT_USERNAME,
            Config.BOT_PASSWORD,
            Config.BOT_MA_FILE,
            Config.PROXY,
            request_timeout=Config.INVENTORY_TIMEOUT,
        )
        return cls(Config.BOT_ID, steam)

    def get_snapshot(self, app_context: AppContext) -> List[InventoryItem]:
        """GetSnapshot - текущее содержимое инвентаря бота, без кэширования"""
        self._log_function_call("GetSnapshot", "start")
        try:
            raw_inventory = self.steam.get_inventory(app_context)
        except Exception as e:
            self._log_function_call("GetSnapshot", f"error - {e}")
            self.logger.error(f"Inventory fetch failed for bot {self.bot_id}: {e}")
            raise ProviderUnavailable(str(e)) from e

        if raw_inventory is None:
            self._log_function_call("GetSnapshot", "error - empty response")
            self.logger.error(f"Inventory fetch for bot {self.bot_id} returned nothing")
            raise ProviderUnavailable("Inventory provider returned no data")

        items = [
            self._to_inventory_item(raw_item, position)
            for position, raw_item in enumerate(raw_inventory.values(), start=1)
        ]
        self.last_update = datetime.now()
        self._log_function_call("GetSnapshot", f"success - {len(items)} items loaded")
        return items

    def _to_inventory_item(self, raw_item: Dict, position: int) -> InventoryItem:
        tags = raw_item.get("tags") or []
        # Редкость и цвет берутся из второго тега
        rarity_tag = tags[1] if len(tags) > 1 else {}
        return InventoryItem(
            index=raw_item.get("pos", position),
            assetid=str(raw_item.get("assetid") or raw_item.get("id")),
            name=raw_item.get("market_name", ""),
            icon_url=f"{self.image_cdn}{raw_item.get('icon_url', '')}/200x200",
            rarity=rarity_tag.get("localized_tag_name") or rarity_tag.get("name"),
            color=rarity_tag.get("color"),
            descriptions=list(raw_item.get("descriptions") or []),
        )

    def _log_function_call(self, function_name: str, result: str):
        """Логирование каждого вызова функций бота"""
        log_entry = {
            'bot_id': self.bot_id,
            'function': function_name,
            'time': datetime.now().isoformat(),
            'result': result
        }

        # Запросы идут из пула потоков, запись в файл сериализуется
        with self._lock:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            with open(self.logs_dir / f'bot_{self.bot_id}_calls.json', 'a') as f:
                json.dump(log_entry, f, ensure_ascii=False)
                f.write('\n')
