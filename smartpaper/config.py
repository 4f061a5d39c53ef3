"""应用配置管理。

使用 Pydantic Settings 统一读取环境变量，便于在本地/生产之间切换。
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """核心配置项。

    - ``storage_backend``：``memory`` 为进程内存储（默认），``sql`` 使用 SQLAlchemy。
    - ``database_url``：仅在 ``sql`` 后端下生效。
    - ``seed_data``：启动时是否写入示例用户、班级与试卷。
    """

    app_name: str = Field(default="SmartPaper AI", description="应用名称")
    debug: bool = False

    storage_backend: Literal["memory", "sql"] = Field(
        default="memory", description="存储后端"
    )
    database_url: str = Field(
        default="sqlite:///./storage/smartpaper.db", description="SQLAlchemy 数据库 URL"
    )
    seed_data: bool = Field(default=True, description="启动时写入示例数据")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="日志级别"
    )

    password_hash_iterations: int = Field(
        default=260_000, ge=1, description="PBKDF2 迭代次数"
    )

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def cors_origins_list(self) -> list[str]:
        """解析逗号分隔的 CORS 来源。"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    model_config = {
        "env_prefix": "SMARTPAPER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """缓存后的全局配置实例。"""

    return Settings()
