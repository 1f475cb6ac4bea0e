from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric
from datetime import datetime, timezone
from database import Base


def _utcnow():
    # Naive UTC so SQLite and PostgreSQL TIMESTAMP columns behave the same
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Inquiry(Base):
    __tablename__ = "inquiries"
    # Never hand out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    submission_date = Column(DateTime, nullable=False, default=_utcnow, index=True)
    status = Column(String(50), nullable=False, default="New", server_default="New")

    client_name = Column(String(200), nullable=True)
    contact_person = Column(String(200), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    project_name = Column(String(200), nullable=True)
    project_description = Column(Text, nullable=True)
    due_date = Column(String(50), nullable=True)
    budget = Column(Numeric(asdecimal=False), nullable=True)
    duration = Column(Integer, nullable=True)  # days

# Fields an admin may overwrite; id, submission_date and status are excluded
MUTABLE_FIELDS = (
    "client_name",
    "contact_person",
    "email",
    "phone",
    "project_name",
    "project_description",
    "due_date",
    "budget",
    "duration",
)
