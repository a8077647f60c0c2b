from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Table, Text

from app.core.database import metadata

jobs = Table(
    "jobs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("salary", Integer, nullable=True),
    Column("equity", Numeric, nullable=True),
    Column(
        "company_handle",
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    CheckConstraint("salary >= 0", name="ck_jobs_salary"),
    CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
)
