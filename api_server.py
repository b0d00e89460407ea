from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from typing import Any, Optional
import asyncio
import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from starlette.middleware.sessions import SessionMiddleware
from config import Config
from bot.bot_core import TradeBot
from bot.exceptions import AuthenticationError, ProviderUnavailable, UnknownViewerProfile
from bot.models import AppContext, OfferRole
from market.auth import verify_token
from market.directory import UserDirectory
from market.ledger import OfferLedger
from market.reconciler import OfferReconciler
from market.sessions import SessionStore
from market.schemas import OffersResponse, ProfileResponse, TokenRequest
from utils.logger import setup_logger

logger = setup_logger("api_server")


@dataclass
class MarketServices:
    reconciler: OfferReconciler
    directory: UserDirectory
    sessions: Optional[SessionStore] = None
    mongo_client: Optional[Any] = None


def build_services() -> MarketServices:
    """Подключение к MongoDB и вход бота в Steam, один раз на процесс"""
    mongo_client = MongoClient(Config.MONGO_URI)
    db = mongo_client[Config.MONGO_DB]
    directory = UserDirectory(db[Config.MONGO_USERS])
    reconciler = OfferReconciler(
        ledger=OfferLedger(db[Config.MONGO_OFFERS]),
        directory=directory,
        provider=TradeBot.from_config(),
        app_context=AppContext(Config.INVENTORY_APP_ID, Config.INVENTORY_CONTEXT_ID),
        provider_timeout=Config.INVENTORY_TIMEOUT,
    )
    return MarketServices(
        reconciler=reconciler,
        directory=directory,
        sessions=SessionStore(db[Config.MONGO_SESSIONS]),
        mongo_client=mongo_client,
    )


# Адаптеры аутентификации: оба возвращают steamid зрителя или бросают AuthenticationError

def bearer_viewer(request: Request) -> str:
    """Токен из заголовка Authorization: Bearer <token>"""
    auth_header = request.headers.get("authorization")
    parts = auth_header.split(" ") if auth_header else []
    token = parts[1] if len(parts) > 1 else None
    return verify_token(token, request.app.state.token_secret)


def session_viewer(request: Request) -> str:
    """steamid из серверной сессии: в подписанной cookie только sid, запись в MongoDB"""
    steamid = request.app.state.services.sessions.resolve(request.session.get("sid"))
    if not steamid:
        raise AuthenticationError(401, "No session")
    return steamid


AUTH_ADAPTERS = {
    "token": bearer_viewer,
    "session": session_viewer,
}


def get_services(request: Request) -> MarketServices:
    return request.app.state.services


def create_app(services: MarketServices = None, auth_mode: str = None,
               token_secret: str = None, session_secret: str = None) -> FastAPI:
    auth_mode = auth_mode or Config.AUTH_MODE
    if auth_mode not in AUTH_ADAPTERS:
        raise ValueError(f"Unknown auth mode '{auth_mode}'")
    viewer = AUTH_ADAPTERS[auth_mode]
    if auth_mode == "session" and services is not None and services.sessions is None:
        raise ValueError("Session auth mode needs a session store")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.services is None:
            app.state.services = await asyncio.to_thread(build_services)
            logger.info("Market services online")
        yield
        if app.state.services.mongo_client is not None:
            app.state.services.mongo_client.close()

    app = FastAPI(title="Steam Trade Market API", version="1.0.0", lifespan=lifespan)
    app.state.services = services
    app.state.token_secret = token_secret or Config.TOKEN_SECRET_KEY
    app.state.auth_mode = auth_mode

    if auth_mode == "session":
        app.add_middleware(SessionMiddleware, secret_key=session_secret or Config.SESSION_SECRET_KEY)

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        logger.info(f"Rejected request to {request.url.path}: {exc}")
        return Response(status_code=exc.status_code)

    @app.exception_handler(ProviderUnavailable)
    async def provider_unavailable_handler(request: Request, exc: ProviderUnavailable):
        return JSONResponse(status_code=503, content={"detail": "Inventory service unavailable"})

    @app.exception_handler(UnknownViewerProfile)
    async def unknown_profile_handler(request: Request, exc: UnknownViewerProfile):
        return JSONResponse(status_code=500, content={"detail": "Profile record is missing"})

    @app.get("/health")
    async def health_check():
        """Проверка здоровья API"""
        return {"status": "healthy"}

    @app.post("/token")
    async def check_token(body: TokenRequest, request: Request):
        """Проверка токена, выданного при входе; в режиме сессии заодно восстанавливает сессию"""
        try:
            steamid = verify_token(body.token, request.app.state.token_secret)
        except AuthenticationError:
            return {"success": False}
        if request.app.state.auth_mode == "session":
            services = request.app.state.services
            request.session["sid"] = await asyncio.to_thread(services.sessions.create, steamid)
        return {"success": True}

    router = APIRouter()

    @router.get("/bought", response_model=OffersResponse)
    async def get_bought(viewer_id: str = Depends(viewer), services: MarketServices = Depends(get_services)):
        """Офферы, где пользователь покупатель"""
        rows = await services.reconciler.reconcile_offers(viewer_id, OfferRole.BUYER)
        return {"offers": [asdict(row) for row in rows]}

    @router.get("/owned", response_model=OffersResponse)
    async def get_owned(viewer_id: str = Depends(viewer), services: MarketServices = Depends(get_services)):
        """Офферы, где пользователь продавец"""
        rows = await services.reconciler.reconcile_offers(viewer_id, OfferRole.SELLER)
        return {"offers": [asdict(row) for row in rows]}

    @router.get("/user", response_model=ProfileResponse)
    async def get_user(viewer_id: str = Depends(viewer), services: MarketServices = Depends(get_services)):
        """Профиль текущего пользователя"""
        return await asyncio.to_thread(services.directory.get_profile, viewer_id)

    app.include_router(router)
    return app


app = create_app()

if __name__ == "__main__":
    print("Запуск API сервера маркетплейса...")

    uvicorn.run(
        "api_server:app",
        host=Config.API_HOST,
        port=Config.API_PORT,
        log_level="info"
    )
