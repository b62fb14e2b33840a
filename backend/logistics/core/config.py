from typing import List, Union
import logging

from pydantic import AnyHttpUrl, Field, validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    PROJECT_NAME: str = "Логистика - админ-панель"
    API_PREFIX: str = "/api/v1"

    # 无认证模式下的默认操作人（请求头未携带 X-User-Id 时使用）
    DEFAULT_USER_ID: int = 1
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_FULL_NAME: str = "Администратор"

    # CORS配置
    BACKEND_CORS_ORIGINS: List[Union[str, AnyHttpUrl]] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # 数据库配置
    SQLITE_DATABASE_URI: str = "sqlite:///./logistics.db"
    SQL_DEBUG: bool = False

    # 日志
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"
    # {date} 替换为当天日期
    LOG_FILE_NAME: str = "logistics_{date}.log"
    LOG_ERROR_FILE_NAME: str = "logistics_error_{date}.log"
    # 只保留 WARNING 以上的第三方日志器
    LOG_QUIET_LOGGERS: List[str] = ["uvicorn.access", "sqlalchemy.engine", "aiosqlite", "apscheduler"]

    # 夜间对账：全量重算订单、货车、仓库汇总
    RECONCILE_ENABLED: bool = True
    RECONCILE_HOUR: int = 2  # 0-23
    RECONCILE_MINUTE: int = 30  # 0-59

    class Config:
        case_sensitive = True
        env_file = ".env"

    @property
    def async_database_uri(self) -> str:
        return self.SQLITE_DATABASE_URI.replace("sqlite:///", "sqlite+aiosqlite:///")


settings = Settings()
logger.info(f"加载配置: API_PREFIX={settings.API_PREFIX}, DB={settings.SQLITE_DATABASE_URI}")
