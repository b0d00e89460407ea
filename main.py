#!/usr/bin/env python3
"""
Запуск API маркетплейса.
Режим аутентификации: token (заголовок Authorization) или session (cookie).
"""

import argparse
import uvicorn
from api_server import create_app
from config import Config


def main():
    parser = argparse.ArgumentParser(description="API маркетплейса предметов Steam")

    parser.add_argument("--auth", "-a",
                        choices=["token", "session"],
                        default=Config.AUTH_MODE,
                        help="Способ аутентификации запросов")
    parser.add_argument("--host", default=Config.API_HOST)
    parser.add_argument("--port", "-p", type=int, default=Config.API_PORT)

    args = parser.parse_args()

    print("=== Steam Trade Market API ===")
    print(f"Аутентификация: {args.auth}, адрес: http://{args.host}:{args.port}")

    # Бот и подключение к базе поднимаются в lifespan приложения
    uvicorn.run(create_app(auth_mode=args.auth), host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
