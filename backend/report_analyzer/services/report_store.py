"""
Credit Report Store

Persistence for assembled CreditReports. Reports are inserted once and only
ever read or deleted afterwards. All reads return the API dict shape.
"""
import logging
import math
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..models.db_models import CreditReportDB
from ..models.ssot import CreditReport

logger = logging.getLogger(__name__)

# Score bands for statistics
HIGH_SCORE_THRESHOLD = 750
MID_SCORE_THRESHOLD = 650

SORT_COLUMNS = {
    "uploadDate": CreditReportDB.upload_date,
    "createdAt": CreditReportDB.created_at,
    "creditScore": CreditReportDB.credit_score,
    "currentBalance": CreditReportDB.current_balance,
    "name": CreditReportDB.name,
    "fileName": CreditReportDB.file_name,
}


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CreditReportStore:
    """
    CRUD and query operations over persisted credit reports.
    One instance per request-scoped Session.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, report: CreditReport) -> str:
        """Persist an assembled report and return its new id."""
        payload = report.to_dict()
        row = CreditReportDB(
            id=str(uuid4()),
            name=report.basic_details.name,
            pan=report.basic_details.pan,
            mobile=report.basic_details.mobile,
            credit_score=report.basic_details.credit_score,
            current_balance=report.report_summary.current_balance,
            basic_details=payload["basicDetails"],
            report_summary=payload["reportSummary"],
            credit_accounts=payload["creditAccounts"],
            addresses=payload["addresses"],
            file_name=report.file_name,
            upload_date=report.upload_date,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Saved credit report {row.id} ({report.file_name})")
        return row.id

    def find_all(
        self,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "uploadDate",
        order: str = "desc",
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        One page of reports plus the total count.

        Raises ValueError for an unknown sort field or order.
        """
        column = SORT_COLUMNS.get(sort_by)
        if column is None:
            raise ValueError(f"Cannot sort by '{sort_by}'. Allowed: {', '.join(SORT_COLUMNS)}")
        if order not in ("asc", "desc"):
            raise ValueError(f"Invalid sort order '{order}'. Use 'asc' or 'desc'")

        total = self.db.query(CreditReportDB).count()
        rows = (
            self.db.query(CreditReportDB)
            .order_by(column.desc() if order == "desc" else column.asc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [row.to_dict() for row in rows], total

    def find_by_id(self, report_id: str) -> Optional[Dict[str, Any]]:
        row = self.db.query(CreditReportDB).filter(CreditReportDB.id == report_id).first()
        return row.to_dict() if row else None

    def delete(self, report_id: str) -> Optional[Dict[str, Any]]:
        """Delete a report, returning what was deleted (None if absent)."""
        row = self.db.query(CreditReportDB).filter(CreditReportDB.id == report_id).first()
        if not row:
            return None

        record = row.to_dict()
        self.db.delete(row)
        self.db.commit()
        logger.info(f"Deleted credit report {report_id}")
        return record

    def search(self, text: str) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on name, PAN or mobile."""
        pattern = f"%{_escape_like(text.strip())}%"
        rows = (
            self.db.query(CreditReportDB)
            .filter(or_(
                CreditReportDB.name.ilike(pattern, escape="\\"),
                CreditReportDB.pan.ilike(pattern, escape="\\"),
                CreditReportDB.mobile.ilike(pattern, escape="\\"),
            ))
            .order_by(CreditReportDB.upload_date.desc())
            .all()
        )
        return [row.to_dict() for row in rows]

    def statistics(self) -> Dict[str, Any]:
        """Report count, average score, total balance and score-band histogram."""
        total_reports, avg_score, total_balance = self.db.query(
            func.count(CreditReportDB.id),
            func.avg(CreditReportDB.credit_score),
            func.sum(CreditReportDB.current_balance),
        ).one()

        def band_count(*conditions) -> int:
            return self.db.query(CreditReportDB).filter(*conditions).count()

        high = band_count(CreditReportDB.credit_score >= HIGH_SCORE_THRESHOLD)
        mid = band_count(
            CreditReportDB.credit_score >= MID_SCORE_THRESHOLD,
            CreditReportDB.credit_score < HIGH_SCORE_THRESHOLD,
        )
        low = band_count(CreditReportDB.credit_score < MID_SCORE_THRESHOLD)

        return {
            "totalReports": total_reports or 0,
            "avgCreditScore": int(math.floor(float(avg_score) + 0.5)) if avg_score is not None else 0,
            "totalBalance": int(total_balance or 0),
            "creditScoreDistribution": {
                "excellent": high,
                "good": mid,
                "needsImprovement": low,
            },
        }
