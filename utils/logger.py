import logging
from datetime import datetime
from pathlib import Path
from config import Config

def setup_logger(name: str, logs_dir: str = None) -> logging.Logger:
    logger = logging.getLogger(name)
    # Повторный вызов для того же имени не должен дублировать хендлеры
    if logger.handlers:
        return logger

    log_dir = Path(logs_dir or Config.LOGS_DIR) / name
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    file_handler = logging.FileHandler(log_dir / f"{datetime.now().date()}.log")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger
