from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings, env_file=".env", extra="ignore"):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False  # if true, the server will reload on code changes

    LOG_JSON_FORMAT: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""
    LOG_NAME: str = "knee_classifier"
    LOG_ACCESS_NAME: str = "knee_classifier.access"

    # External scoring service (IBM_SCORING_ENDPOINT / IBM_API_KEY)
    ibm_scoring_endpoint: str = ""
    ibm_api_key: str = ""
    # Header the scoring service reads the key from
    ibm_api_key_header: str = "x-api-key"
    # Seconds to wait on the scoring service before giving up
    ibm_request_timeout: float = 60.0

    @property
    def scoring_configured(self) -> bool:
        return bool(self.ibm_scoring_endpoint and self.ibm_api_key)


settings = Settings()


def get_settings() -> Settings:
    """Resolve settings from the current environment.

    Used as a request dependency so configuration changes are picked up
    without restarting the process.
    """
    return Settings()
