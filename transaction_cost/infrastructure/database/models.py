# transaction_cost/infrastructure/database/models.py
#
# Mappings onto existing core-banking tables. Column names are those of the
# deployed schema; this service never creates or alters them.

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text

from transaction_cost.infrastructure.database.session import Base


class CustomerRow(Base):
    """Customer master (CUMST)."""

    __tablename__ = "CUMST"

    customer_id = Column("CUSCUN", String, primary_key=True)
    document_type = Column("CUSTID", String, nullable=False)
    document_number = Column("CUSIDN", String, nullable=False)


class CostProfileRow(Base):
    """Per-customer transaction cost profile (CNTRLPRF). Cost is in minor units."""

    __tablename__ = "CNTRLPRF"

    transaction_code = Column("PRFKEY", String, primary_key=True)
    customer_id = Column("PRFCUN", String, primary_key=True)
    cost = Column("PRFFA1", Integer, nullable=False)
    currency_code = Column("PRFFCY", String, nullable=False)


class AuditLogRow(Base):
    """Append-only audit trail (AUDIT_LOGS)."""

    __tablename__ = "AUDIT_LOGS"

    id = Column("ID", BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    transaction_id = Column("ID_TRANSACCION", String, nullable=False, index=True)
    message_type = Column("TIPO_MENSAJE", String, nullable=False)
    customer_ref = Column("LOG_CUN", String, nullable=True)
    channel = Column("LOG_CANAL", String, nullable=False)
    login_user = Column("LOGIN_USER", String, nullable=False)
    timestamp = Column("TS", DateTime(timezone=True), nullable=False)
    payload = Column("PAYLOAD", Text, nullable=True)
    payload_hash = Column("PAYLOAD_HASH", String(64), nullable=True)
    status = Column("ESTADO", String, nullable=False)
    error_detail = Column("DETALLE_ERROR", Text, nullable=True)
    origin = Column("ORIGEN", String, nullable=True)
    service = Column("SERVICIO", String, nullable=True)
    created_by = Column("CREATED_BY", String, nullable=True)
