"""
Credit Report Analyzer - SQLAlchemy ORM Models
"""
from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

from sqlalchemy import Column, String, Integer, BigInteger, DateTime, JSON
from ..database import Base


class CreditReportDB(Base):
    """Persisted credit report. Written once per upload, never updated in place."""
    __tablename__ = "credit_reports"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))  # UUID

    # Denormalized identity columns for search, sort and statistics
    name = Column(String(255), nullable=False, index=True)
    pan = Column(String(20), index=True)
    mobile = Column(String(20))
    credit_score = Column(Integer, default=0, index=True)
    current_balance = Column(BigInteger, default=0)

    # Sub-documents as JSON, in API field naming
    basic_details = Column(JSON, nullable=False)
    report_summary = Column(JSON, nullable=False)
    credit_accounts = Column(JSON, default=list)
    addresses = Column(JSON, default=list)

    file_name = Column(String(500), nullable=False)
    upload_date = Column(DateTime, default=datetime.utcnow, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape returned by the API."""
        return {
            "id": self.id,
            "basicDetails": self.basic_details,
            "reportSummary": self.report_summary,
            "creditAccounts": self.credit_accounts or [],
            "addresses": self.addresses or [],
            "fileName": self.file_name,
            "uploadDate": self.upload_date.isoformat() if self.upload_date else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
