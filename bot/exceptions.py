class BotError(Exception):
    """Базовое исключение для бота"""
    pass

class InventoryError(BotError):
    """Ошибка при работе с инвентарем"""
    pass

class ProviderUnavailable(InventoryError):
    """Снапшот инвентаря бота недоступен (ошибка, таймаут или пустой ответ)"""
    pass

class ProxyError(BotError):
    """Ошибка прокси"""
    pass

class MarketError(Exception):
    """Базовое исключение маркетплейса"""
    pass

class AuthenticationError(MarketError):
    """Отсутствующие (401) или неверные (403) учетные данные"""

    def __init__(self, status_code: int = 401, message: str = "Unauthorized"):
        super().__init__(message)
        self.status_code = status_code

class UnknownViewerProfile(MarketError):
    """Профиль уже аутентифицированного пользователя не найден в справочнике"""

    def __init__(self, steamid: str):
        super().__init__(f"No directory record for authenticated account {steamid}")
        self.steamid = steamid
