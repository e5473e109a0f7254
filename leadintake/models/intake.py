import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func

from leadintake.core.database import Base


class IntakeStatusEnum(enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


def _status_column():
    return Column(
        SQLEnum(
            IntakeStatusEnum,
            name="intakestatus",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=IntakeStatusEnum.PENDING,
        index=True,
    )


class WaitlistEntry(Base):
    __tablename__ = "waitlist"
    # AUTOINCREMENT so SQLite never hands out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    city = Column(String(120), nullable=False)
    status = _status_column()
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class CourierApplication(Base):
    __tablename__ = "couriers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    route = Column(String(200), nullable=False)
    status = _status_column()
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
