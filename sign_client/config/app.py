import os
from pathlib import Path
from typing import Optional

from aws_lambda_powertools.logging import Logger
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = Logger()

DEFAULT_BASE_URL = "https://api.box.com/2.0"


class ClientConfig(BaseModel):
    """Client configuration."""

    app_env: str = Field(
        default="local", description="Runtime environment (local, dev or prod)"
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Base URL of the remote API"
    )
    access_token: Optional[str] = Field(
        default=None, description="Bearer token sent with every request"
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Transport timeout in seconds"
    )
    page_limit: int = Field(
        default=100, gt=0, description="Default number of entries per page"
    )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables.

        In 'local' mode (default), it first loads variables from a .env file.
        In 'dev' and 'prod' modes, it reads directly from environment variables.
        """

        app_env = os.getenv("APP_ENV", "local").lower()
        logger.debug("App environment", extra={"app_env": app_env})
        if app_env == "local":
            dotenv_path = Path(".env")
            load_dotenv(dotenv_path=dotenv_path, override=True)
            logger.debug("Loaded .env file", extra={"dotenv_path": str(dotenv_path)})
        elif app_env not in ["dev", "prod"]:
            raise ValueError(f"Invalid app environment: {app_env}")

        base_url = os.getenv("SIGN_API_BASE_URL", DEFAULT_BASE_URL)
        access_token = os.getenv("SIGN_API_TOKEN")
        timeout = float(os.getenv("SIGN_API_TIMEOUT", "30"))
        page_limit = int(os.getenv("SIGN_API_PAGE_LIMIT", "100"))

        return cls(
            app_env=app_env,
            base_url=base_url,
            access_token=access_token,
            timeout=timeout,
            page_limit=page_limit,
        )
