"""
クライアント設定管理
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """TextMaster クライアント設定"""

    # API認証情報（未設定の場合は Document.save 時にAPIエラーとなる）
    TEXTMASTER_API_KEY: str = ""
    TEXTMASTER_API_SECRET: str = ""

    # API エンドポイント
    TEXTMASTER_BASE_URL: str = "https://api.textmaster.com"
    TEXTMASTER_API_VERSION: str = "v1"

    # HTTP
    TEXTMASTER_TIMEOUT: float = 30.0
    TEXTMASTER_MAX_RETRIES: int = 3
    TEXTMASTER_RETRY_BASE_DELAY: float = 1.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_COLORS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def api_base_url(self) -> str:
        """バージョン付きAPIベースURL"""
        return f"{self.TEXTMASTER_BASE_URL.rstrip('/')}/{self.TEXTMASTER_API_VERSION}"

    @property
    def credentials_configured(self) -> bool:
        """APIキーとシークレットが両方設定されているか"""
        return bool(self.TEXTMASTER_API_KEY and self.TEXTMASTER_API_SECRET)


# グローバル設定インスタンス
settings = Settings()
