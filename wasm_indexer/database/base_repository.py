# wasm_indexer/database/base_repository.py

from typing import TypeVar, Generic, Type, Optional, Any, Dict
from sqlalchemy.orm import Session

from ..core.logging import IndexerLogger


T = TypeVar('T')

class BaseRepository(Generic[T]):
    """Row access for one wasm table; callers own the session and transaction"""

    def __init__(self, db_manager, model_class: Type[T]):
        self.db_manager = db_manager
        self.model_class = model_class
        self.logger = IndexerLogger.get_logger(f'database.repositories.{model_class.__tablename__}')

    def get_by_key(self, session: Session, key: Any) -> Optional[T]:
        try:
            return session.get(self.model_class, key)
        except Exception as e:
            self.logger.error(f"Lookup of {self.model_class.__tablename__} {key!r} failed: {e}")
            raise

    def create(self, session: Session, **values) -> T:
        try:
            row = self.model_class(**values)
            session.add(row)
            session.flush()
        except Exception as e:
            self.logger.error(f"Insert into {self.model_class.__tablename__} failed: {e}")
            raise

        self.logger.debug(f"Inserted {row!r}")
        return row

    def upsert_by_height(self, session: Session, key: Any, row: Dict[str, Any]) -> bool:
        """
        Insert the row, or overwrite the stored one unless it was written at a
        greater height. Returns False when the stored row is newer and kept.
        """
        try:
            stored = session.get(self.model_class, key)
            if stored is None:
                self.create(session, **row)
                return True

            if stored.height > row["height"]:
                self.logger.debug(f"Kept {stored!r} at height {stored.height}, ignoring height {row['height']}")
                return False

            for column, value in row.items():
                setattr(stored, column, value)
            session.flush()
            return True

        except Exception as e:
            self.logger.error(f"Upsert of {self.model_class.__tablename__} {key!r} failed: {e}")
            raise

    def count(self, session: Session) -> int:
        try:
            return session.query(self.model_class).count()
        except Exception as e:
            self.logger.error(f"Count of {self.model_class.__tablename__} failed: {e}")
            raise
