# Environment variables must be loaded before lbnamer.types.settings is imported.
import logging
import os
from dotenv import load_dotenv, find_dotenv

logger = logging.getLogger(__name__)

env_file = os.environ.get("ENV_FILE", ".env")
path = find_dotenv(filename=env_file, usecwd=True)
if path:
    logger.info(f"Loading environment variables from {path}")
    load_dotenv(dotenv_path=path)

from lbnamer.namer import ClusterNamer, FrontendNamer, NamerProtocol  # noqa: E402
from lbnamer.utils.helpers import cert_hash  # noqa: E402

__all__ = [
    "ClusterNamer",
    "FrontendNamer",
    "NamerProtocol",
    "cert_hash",
]

__version__ = "0.1.0"
