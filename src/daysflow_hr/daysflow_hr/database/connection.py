from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: Optional[str]

    @classmethod
    def from_settings(cls, db_config: Mapping) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict; only ``database`` is mandatory."""
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config["database"]),
        )

    def server_only(self) -> "DBConfig":
        return replace(self, database=None)


class DatabaseConnection:
    """Hands out one short-lived mysql-connector connection per repository call.

    The app shares a single instance; bootstrap code builds its own.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    def connect(self):
        params = {
            "host": self.config.host,
            "port": self.config.port,
            "user": self.config.user,
            "password": self.config.password,
        }
        if self.config.database:
            params["database"] = self.config.database
        return mysql.connector.connect(**params)
