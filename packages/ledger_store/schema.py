"""Four-table ledger schema: users -> documents -> statements -> transactions.

Identifiers are uuid4 strings generated by the store at insert time.
Timestamps are ISO-8601 UTC strings. Dates on statements and transactions are
kept exactly as the source document wrote them.
"""

from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("username", Text, nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("created_at", Text, nullable=False),
)

documents = Table(
    "documents",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("filename", Text, nullable=False),
    Column("file_path", Text, nullable=False),
    Column("uploaded_at", Text, nullable=False),
    Index("idx_documents_user_id", "user_id"),
)

statements = Table(
    "statements",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("document_id", String(36), ForeignKey("documents.id"), nullable=False),
    Column("start_date", Text, nullable=False),
    Column("end_date", Text, nullable=False),
    Column("uploaded_at", Text, nullable=False),
    Index("idx_statements_user_id", "user_id"),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("statement_id", String(36), ForeignKey("statements.id"), nullable=False),
    Column("posting_date", Text, nullable=False),
    Column("transaction_date", Text, nullable=False),
    Column("description", Text, nullable=False),
    Column("money_in", Float, nullable=True),
    Column("money_out", Float, nullable=True),
    Column("balance", Float, nullable=False),
    Column("category", Text, nullable=True),
    Column("transaction_type", Text, nullable=False),
    Index("idx_transactions_statement_id", "statement_id"),
)
