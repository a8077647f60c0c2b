"""
Users table.

`password` holds the bcrypt hash; repositories never select it except to
verify a login.
"""

from sqlalchemy import Boolean, Column, String, Table, Text, false

from app.core.database import metadata

users = Table(
    "users",
    metadata,
    Column("username", String(25), primary_key=True),
    Column("password", Text, nullable=False),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("email", Text, nullable=False),
    Column("is_admin", Boolean, nullable=False, server_default=false()),
)
