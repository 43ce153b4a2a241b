# wasm_indexer/database/base.py

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import BigInteger, Column, DateTime, text
from sqlalchemy.orm import declarative_base, declarative_mixin
import msgspec


Base = declarative_base()


@declarative_mixin
class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP')
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=lambda: datetime.now(timezone.utc)
    )


class DBBaseModel(Base, TimestampMixin):
    __abstract__ = True

    @classmethod
    def row_from_msgspec(cls, msgspec_obj: msgspec.Struct, **overrides) -> Dict[str, Any]:
        """Column mapping for a record; nested structs become JSON-ready builtins"""
        data = msgspec.to_builtins(msgspec_obj, builtin_types=(bytes, datetime))
        data.update(overrides)
        valid_columns = {col.name for col in cls.__table__.columns}
        return {k: v for k, v in data.items() if k in valid_columns}

    def __repr__(self) -> str:
        keys = ", ".join(f"{col.name}={getattr(self, col.name)}" for col in self.__table__.primary_key.columns)
        return f"<{self.__class__.__name__}({keys})>"


class DBWasmRecordModel(DBBaseModel):
    __abstract__ = True

    height = Column(BigInteger, nullable=False, index=True)
