from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Dict, Optional

NO_DESCRIPTIONS = {"type": "html", "value": "No Descriptions"}

class OfferRole(str, Enum):
    SELLER = "seller"
    BUYER = "buyer"

@dataclass(frozen=True)
class AppContext:
    app_id: int
    context_id: int

@dataclass
class User:
    steamid: str
    name: str
    avatar: str
    credit: float = 0
    trade_url: str = ""

    @classmethod
    def from_document(cls, doc: Dict) -> "User":
        # Вызывающий код отбрасывает документы без steamid; null-поля превращаются в пустые строки
        return cls(
            steamid=str(doc["steamid"]),
            name=doc.get("name") or "",
            avatar=doc.get("avatar") or "",
            credit=doc.get("credit") or 0,
            trade_url=doc.get("tradeUrl") or "",
        )

    def to_document(self) -> Dict:
        return {
            "steamid": self.steamid,
            "name": self.name,
            "avatar": self.avatar,
            "credit": self.credit,
            "tradeUrl": self.trade_url,
        }

@dataclass(frozen=True)
class PublicIdentity:
    steamid: str
    name: str
    avatar: str

@dataclass
class Offer:
    id: str
    owner_id: str
    buyer_id: str
    items: List[str]  # assetid предметов в инвентаре бота
    price: float
    date: Optional[str] = None
    status: Optional[int] = None
    trade_id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict) -> "Offer":
        return cls(
            id=str(doc["id"]),
            owner_id=doc.get("owner_id"),
            buyer_id=doc.get("buyer_id"),
            items=[str(assetid) for assetid in doc.get("items") or []],
            price=doc.get("price"),
            date=doc.get("date"),
            status=doc.get("status"),
            trade_id=doc.get("trade_id"),
        )

@dataclass
class InventoryItem:
    index: int
    assetid: str
    name: str
    icon_url: str
    rarity: Optional[str] = None
    color: Optional[str] = None
    descriptions: List[Dict] = field(default_factory=list)

    def with_default_descriptions(self) -> "InventoryItem":
        """Пустой список описаний заменяется одной записью-заглушкой"""
        if self.descriptions:
            return self
        return replace(self, descriptions=[dict(NO_DESCRIPTIONS)])

@dataclass
class OfferRow:
    id: str
    is_mine: bool
    is_buyer: bool
    owner: Optional[PublicIdentity]
    buyer_id: str
    trade_id: Optional[str]
    price: float
    items: List[InventoryItem]
    date: Optional[str]
    status: Optional[int]
