from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "KasMail Temporary Email"
    API_V1_STR: str = "/api"

    # Addresses
    MAIL_DOMAIN: str = "kasmail.temp"
    ADDRESS_TTL_SECONDS: int = 30 * 60

    # Expiry sweeper
    SWEEPER_ENABLED: bool = True
    SWEEP_INTERVAL_SECONDS: float = 60

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True

settings = Settings()
