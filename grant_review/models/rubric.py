# grant_review/models/rubric.py
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from grant_review.db.base import Base


class RubricVersion(Base):
    __tablename__ = "rubric_versions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    sections = relationship(
        "RubricSection",
        back_populates="rubric_version",
        order_by="RubricSection.position",
    )


class RubricSection(Base):
    __tablename__ = "rubric_sections"

    id = Column(Integer, primary_key=True, index=True)
    rubric_version_id = Column(
        Integer, ForeignKey("rubric_versions.id"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    rubric_version = relationship("RubricVersion", back_populates="sections")
    criteria = relationship(
        "Criterion",
        back_populates="section",
        order_by="Criterion.position",
    )


class Criterion(Base):
    __tablename__ = "criteria"

    id = Column(Integer, primary_key=True, index=True)
    section_id = Column(Integer, ForeignKey("rubric_sections.id"), nullable=False, index=True)
    label = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    # weight 0: shown on the form, never counted in the composite score
    weight = Column(Float, nullable=False, default=1.0)

    section = relationship("RubricSection", back_populates="criteria")
