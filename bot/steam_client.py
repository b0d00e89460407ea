import requests
from requests.adapters import HTTPAdapter
from steampy.client import SteamClient
from steampy.exceptions import InvalidCredentials, ApiException
from steampy.models import GameOptions
from .exceptions import BotError, InventoryError, ProxyError
from .models import AppContext

class TimeoutHTTPAdapter(HTTPAdapter):
    """steampy не передает timeout в запросы, поэтому он задается на уровне адаптера"""

    def __init__(self, *args, timeout: float = 15, **kwargs):
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)

class SteamClientWrapper:
    """Сессия бота-посредника. Куки, Steam Guard и логин не выходят за пределы этого класса"""

    def __init__(self, api_key: str, username: str, password: str, ma_file_path: str,
                 proxy: str = None, request_timeout: float = 15):
        self.client = SteamClient(api_key)
        self.proxy = proxy
        self.request_timeout = request_timeout
        self._setup_session()
        self._login(username, password, ma_file_path)

    def _setup_session(self):
        adapter = TimeoutHTTPAdapter(timeout=self.request_timeout)
        self.client._session.mount("https://", adapter)
        self.client._session.mount("http://", adapter)

        if self.proxy:
            proxies = {"http": self.proxy, "https": self.proxy}
            self.client._session.proxies.update(proxies)
            try:
                # Проверка работоспособности прокси
                test = requests.get("https://api.steampowered.com", proxies=proxies, timeout=10)
                if test.status_code != 200:
                    raise ProxyError("Proxy test failed")
            except requests.RequestException as e:
                raise ProxyError(f"Proxy error: {e}")

    def _login(self, username: str, password: str, ma_file_path: str):
        try:
            self.client.login(username, password, ma_file_path)
        except InvalidCredentials as e:
            raise BotError(f"Steam auth failed: {e}")

    def get_inventory(self, app_context: AppContext) -> dict:
        """Сырой инвентарь бота: {assetid: описание предмета}"""
        game = GameOptions(str(app_context.app_id), str(app_context.context_id))
        try:
            return self.client.get_my_inventory(game=game)
        except (ApiException, requests.RequestException) as e:
            raise InventoryError(f"Inventory error: {e}")
