"""Key-value backends for the paper collection."""

import logging

import redis
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from scholargen.config import Settings
from scholargen.db.models import Base, KeyValueRecord
from scholargen.db.repositories import KeyValueStore

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """In-memory implementation of KeyValueStore."""

    def __init__(self) -> None:
        self._records: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._records.get(key)

    def set(self, key: str, value: str) -> None:
        self._records[key] = value

    def ping(self) -> bool:
        return True


class RedisKeyValueStore:
    """Redis-backed KeyValueStore using plain GET/SET."""

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize store.

        Args:
            redis_client: Redis client created with decode_responses=True
        """
        self._redis = redis_client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        client = redis.from_url(url, decode_responses=True)  # type: ignore[no-untyped-call]
        return cls(client)

    def get(self, key: str) -> str | None:
        value = self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value  # type: ignore[return-value]

    def set(self, key: str, value: str) -> None:
        self._redis.set(key, value)

    def ping(self) -> bool:
        try:
            return bool(self._redis.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False


class SqlKeyValueStore:
    """SQL-backed KeyValueStore: one row per key in ``kv_record``."""

    def __init__(self, engine: Engine) -> None:
        """Initialize store and create the table if missing.

        Args:
            engine: SQLAlchemy engine
        """
        self._engine = engine
        self._session_factory: sessionmaker[Session] = sessionmaker(
            bind=engine, expire_on_commit=False
        )
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlKeyValueStore":
        return cls(create_engine(database_url, pool_pre_ping=True, echo=False))

    def get(self, key: str) -> str | None:
        with self._session_factory() as session:
            record = session.get(KeyValueRecord, key)
            return record.value if record is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            record = session.get(KeyValueRecord, key)
            if record is None:
                session.add(KeyValueRecord(key=key, value=value))
            else:
                record.value = value
            session.commit()

    def ping(self) -> bool:
        try:
            with self._session_factory() as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {type(e).__name__}")
            return False


def create_kv_store(settings: Settings) -> KeyValueStore:
    """Build the configured key-value backend.

    Raises:
        ValueError: If the redis backend is selected without REDIS_URL.
    """
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()

    if settings.storage_backend == "redis":
        if not settings.redis_url:
            raise ValueError("REDIS_URL must be set when STORAGE_BACKEND=redis")
        return RedisKeyValueStore.from_url(settings.redis_url)

    return SqlKeyValueStore.from_url(settings.database_url)
