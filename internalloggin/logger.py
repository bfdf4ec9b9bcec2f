# Filosofia: "O que não está no log, não aconteceu."

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

# Pasta de logs internos; pode ser redirecionada por variável de ambiente
LOG_DIR = Path(
    os.getenv("JSONBRIDGE_LOG_DIR", Path(__file__).parent / "internallogs")
)
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str = "JsonBridge_FLS") -> logging.Logger:
    """
    Configura um logger do JsonBridge_FLS.

    Args:
        name (str): O nome do logger. Default é "JsonBridge_FLS".

    Returns:
        logging.Logger: O logger configurado.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Evita duplicidade de log se o logger for inicializado mais de uma vez
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

        # Console: apenas INFO em diante
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(
            os.getenv("JSONBRIDGE_CONSOLE_LEVEL", "INFO").upper()
        )
        logger.addHandler(console_handler)

        # Arquivo rotativo: tudo, inclusive trocas recusadas pelo portão (DEBUG)
        file_path = LOG_DIR / f"{name}.log"
        file_handler = RotatingFileHandler(
            filename=file_path,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=13,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)
    return logger


# Instância única para ser importada em outros módulos
logger = setup_logger()
