from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    APP_NAME: str = "SGPC-Kirtan-Archive"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Archive origin. Web builds point this at their dev proxy prefix.
    BASE_DOMAIN: str = "https://sgpc.net"
    HTTP_TIMEOUT: float = 10.0

    # Bundled classification dataset
    CLASSIFICATION_DATASET: Path = PACKAGE_DIR / "data" / "kirtan_classification.csv"

    # Cors
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def KIRTAN_BASE(self) -> str:
        return f"{self.BASE_DOMAIN.rstrip('/')}/kirtan/"

    @property
    def RAGIWISE_BASE(self) -> str:
        return f"{self.BASE_DOMAIN.rstrip('/')}/ragiwise/"

    @property
    def CLASSIFICATION_BASE(self) -> str:
        return f"{self.BASE_DOMAIN.rstrip('/')}/classification/"

    @property
    def roots(self) -> dict[str, str]:
        return {
            "years": self.KIRTAN_BASE,
            "ragis": self.RAGIWISE_BASE,
            "classification": self.CLASSIFICATION_BASE,
        }

settings = Settings()
