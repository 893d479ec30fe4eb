"""
Runtime configuration for the Event API.

Values come from environment variables; a ``.env`` file in the project
root is loaded first so local development needs no exported variables.
"""

import os
from datetime import timedelta
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_TOKEN_EXPIRATION_HOURS = 72


class Config:
    """
    Settings the app factory needs to build its services.

    Args:
        database_url (str): libpq connection string for PostgreSQL.
        jwt_secret (str): HMAC secret used to sign bearer tokens.
        token_expiration_hours (int): Lifetime of issued tokens.
        db_pool_min (int): Connections opened when the pool starts.
        db_pool_max (int): Upper bound on pooled connections. Requests beyond
            it fail with 500, so match it to the server's thread count.
        api_prefix (str): Path prefix for every API route (e.g. "/api/v1").
        cors_origins (list): Origins allowed by the CORS layer.
        port (int): Port used by the development server.
        log_level (str): Root logging level.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        jwt_secret: str = "",
        token_expiration_hours: int = DEFAULT_TOKEN_EXPIRATION_HOURS,
        db_pool_min: int = 1,
        db_pool_max: int = 10,
        api_prefix: str = "",
        cors_origins: Optional[List[str]] = None,
        port: int = 5050,
        log_level: str = "INFO",
    ) -> None:
        self.database_url = database_url
        self.jwt_secret = jwt_secret
        self.token_expiration_hours = token_expiration_hours
        self.db_pool_min = db_pool_min
        self.db_pool_max = db_pool_max
        self.api_prefix = api_prefix.rstrip("/")
        self.cors_origins = cors_origins or []
        self.port = port
        self.log_level = log_level

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.token_expiration_hours)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Build a Config from the process environment.

        Raises:
            RuntimeError: If JWT_SECRET is not set.
        """
        load_dotenv()

        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            raise RuntimeError("JWT_SECRET is missing. Set it in .env")

        origins = os.getenv("CORS_ORIGINS", "")

        return cls(
            database_url=os.getenv("DATABASE_URL"),
            jwt_secret=jwt_secret,
            token_expiration_hours=int(
                os.getenv("TOKEN_EXPIRATION_HOURS", DEFAULT_TOKEN_EXPIRATION_HOURS)
            ),
            db_pool_min=int(os.getenv("DB_POOL_MIN", 1)),
            db_pool_max=int(os.getenv("DB_POOL_MAX", 10)),
            api_prefix=os.getenv("API_PREFIX", ""),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            port=int(os.getenv("GATEWAY_PORT", 5050)),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
