"""
Companies table.

Columns use snake_case; repositories alias them back to camelCase field
names (`num_employees AS "numEmployees"`).
"""

from sqlalchemy import CheckConstraint, Column, Integer, String, Table, Text

from app.core.database import metadata

companies = Table(
    "companies",
    metadata,
    Column("handle", String(25), primary_key=True),
    Column("name", Text, nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("num_employees", Integer, nullable=True),
    Column("logo_url", Text, nullable=True),
    CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
)
