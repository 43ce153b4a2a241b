# wasm_indexer/database/connection.py

from typing import Any, Dict, Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, Engine, make_url, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool

from ..core.logging import IndexerLogger, log_with_context, INFO, DEBUG, ERROR
from ..types import DatabaseConfig
from .base import Base


class DatabaseManager:
    """
    Owns the engine and session factory of the wasm database.

    Postgres (psycopg) gets a bounded QueuePool; SQLite, used for local runs
    and tests, uses the dialect default. Repositories are created lazily and
    cached per manager.
    """

    def __init__(self, config: DatabaseConfig):
        if not config:
            raise ValueError("DatabaseConfig is required")

        self.config = config
        self.logger = IndexerLogger.get_logger('database.connection')
        self._engine = None
        self._session_factory = None
        self._repositories: Dict[str, Any] = {}

        log_with_context(self.logger, INFO, "DatabaseManager created", database=self.safe_url)

    @property
    def safe_url(self) -> str:
        """Database URL with the password masked"""
        return make_url(self.config.url).render_as_string(hide_password=True)

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.config.url).get_backend_name() == "sqlite"

    def _engine_options(self) -> Dict[str, Any]:
        if self.is_sqlite:
            return {}
        return {
            "poolclass": QueuePool,
            "pool_size": self.config.pool_size,
            "max_overflow": self.config.max_overflow,
            "pool_timeout": 30,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
        }

    def initialize(self) -> None:
        if self._engine is not None:
            self.logger.warning("Database already initialized")
            return

        try:
            self._engine = create_engine(self.config.url, echo=False, **self._engine_options())
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            log_with_context(self.logger, ERROR, "Failed to connect to database",
                             database=self.safe_url,
                             error=str(e))
            self._engine = None
            self._session_factory = None
            raise

        log_with_context(self.logger, INFO, "Database connected",
                         database=self.safe_url,
                         backend=self._engine.dialect.name)

    def create_tables(self) -> None:
        # Import registers the tables on Base.metadata
        from . import tables  # noqa: F401

        Base.metadata.create_all(self.engine)
        log_with_context(self.logger, INFO, "Wasm tables ensured",
                         tables=sorted(Base.metadata.tables))

    def shutdown(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._repositories.clear()
        self.logger.info("Database connections closed")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._session_factory

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Session that is rolled back on error and always closed"""
        session = self.session_factory()
        try:
            yield session
        except Exception as e:
            log_with_context(self.logger, DEBUG, "Rolling back session",
                             error=str(e),
                             exception_type=type(e).__name__)
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def get_transaction(self) -> Generator[Session, None, None]:
        """Session that commits when the block exits cleanly"""
        with self.get_session() as session:
            yield session
            session.commit()

    def health_check(self) -> bool:
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            log_with_context(self.logger, ERROR, "Database health check failed", error=str(e))
            return False
        return True

    # === Wasm Repositories ===

    def _repository(self, name: str, repo_class):
        if name not in self._repositories:
            self._repositories[name] = repo_class(self)
        return self._repositories[name]

    def get_code_repo(self):
        from .repositories import WasmCodeRepository
        return self._repository('wasm_code', WasmCodeRepository)

    def get_contract_repo(self):
        from .repositories import WasmContractRepository
        return self._repository('wasm_contract', WasmContractRepository)

    def get_execute_repo(self):
        from .repositories import WasmExecuteContractRepository
        return self._repository('wasm_execute_contract', WasmExecuteContractRepository)

    def get_params_repo(self):
        from .repositories import WasmParamsRepository
        return self._repository('wasm_params', WasmParamsRepository)
