from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator


class TokenAmount(TypeDecorator):
    """
    Exact token amount in human units.

    NUMERIC(78, 18) where the database has it; SQLite has no exact decimal
    storage, so there the value is kept as its string form.
    """

    impl = Numeric(78, 18)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(96))
        return dialect.type_descriptor(Numeric(78, 18, asdecimal=True))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(str(value))
        if dialect.name == "sqlite":
            return format(value, "f")
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(str(value))
