"""
Tortoise ORM configuration
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from tortoise import Tortoise

from ..config import Settings

MODELS_MODULE = "src.infra.tortoise_client.models"
SQLITE_SCHEME = "sqlite://"

logger = logging.getLogger(__name__)


def build_tortoise_config(database_url: str) -> Dict[str, Any]:
    return {
        "connections": {
            "default": database_url
        },
        "apps": {
            "models": {
                "models": [MODELS_MODULE],
                "default_connection": "default",
            },
        },
    }


def sqlite_file_path(database_url: str) -> Optional[Path]:
    """ファイルベースのSQLite URLならそのパスを返す。インメモリや他DBはNone"""
    if not database_url.startswith(SQLITE_SCHEME):
        return None
    path = database_url[len(SQLITE_SCHEME):].split("?", 1)[0]
    if not path or path == ":memory:":
        return None
    return Path(path)


async def init_db(settings: Settings) -> None:
    """Tortoiseを初期化する。generate_schemasが有効ならテーブルも作成する"""
    db_file = sqlite_file_path(settings.database_url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    await Tortoise.init(config=build_tortoise_config(settings.database_url))
    if settings.generate_schemas:
        await Tortoise.generate_schemas(safe=True)
    logger.info("Database initialized", extra={"environment": settings.environment})


async def close_db() -> None:
    await Tortoise.close_connections()
