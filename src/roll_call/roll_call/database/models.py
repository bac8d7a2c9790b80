"""Tables backing the roster store."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class RosterRow(Base):
    __tablename__ = "rosters"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False)
    modified_at = Column(DateTime, nullable=False)
    # Save order: loading lists them oldest-saved first.
    seq = Column(Integer, nullable=False, index=True)

    students = relationship(
        "StudentRow",
        order_by="StudentRow.position",
        lazy="selectin",
        viewonly=True,
    )

    def __repr__(self):
        return f"<RosterRow(id={self.id}, name={self.name})>"


class StudentRow(Base):
    __tablename__ = "students"

    roster_id = Column(String, ForeignKey("rosters.id", ondelete="CASCADE"), primary_key=True)
    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    given_name = Column(String, nullable=False)
    family_name = Column(String, nullable=False)
    national_id = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    present = Column(Boolean, nullable=False, default=False)
    is_manual = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False)
