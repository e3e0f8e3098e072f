"""
Resume database model - one uploaded document plus everything derived from it
"""
import enum
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from resumeai.app.db.base import Base


class ResumeStatus(str, enum.Enum):
    UPLOADED = "uploaded"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    ENHANCED = "enhanced"


class Resume(Base):
    __tablename__ = "resumes"
    __table_args__ = (UniqueConstraint("user_id", "file_name", name="uq_resumes_user_file_name"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    original_text = Column(Text, nullable=False)  # set once at upload
    enhanced_text = Column(Text, nullable=True)
    file_name = Column(String(255), nullable=False)
    file_type = Column(String(10), nullable=False)  # pdf | docx | txt

    status = Column(String(20), nullable=False, default=ResumeStatus.UPLOADED.value)
    target_role = Column(String(200), nullable=True)
    target_industry = Column(String(200), nullable=True)

    # Embedded documents. Lists are append-only: always assign a new list so the ORM sees the change.
    analysis_results = Column(JSON, nullable=True)
    job_matching = Column(JSON, default=list)
    versions = Column(JSON, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="resumes")
