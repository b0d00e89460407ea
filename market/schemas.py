from pydantic import BaseModel
from typing import List, Dict, Optional, Union

# Pydantic модели для API

class OwnerOut(BaseModel):
    steamid: str
    name: str
    avatar: str

class ItemOut(BaseModel):
    index: int
    assetid: str
    name: str
    icon_url: str
    rarity: Optional[str] = None
    color: Optional[str] = None
    descriptions: List[Dict]

class OfferRowOut(BaseModel):
    id: str
    is_mine: bool
    is_buyer: bool
    owner: Optional[OwnerOut] = None
    buyer_id: Optional[str] = None
    trade_id: Optional[str] = None
    price: Optional[Union[int, float]] = None
    items: List[ItemOut]
    date: Optional[str] = None
    status: Optional[int] = None

class OffersResponse(BaseModel):
    offers: List[OfferRowOut]

class ProfileResponse(BaseModel):
    name: str
    avatar: str
    credit: Union[int, float]

class TokenRequest(BaseModel):
    token: str
