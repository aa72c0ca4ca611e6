from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from loguru import logger
from sqlmodel import Session, select
from app.models.base import utc_now
from app.models.enums import ReportStatus, ReportType
from app.models.report import ListingReport, Report, UserReport
from app.services.listing_service import get_listing
from app.services.user_service import get_user


@dataclass(frozen=True)
class TargetResolution:
    user_id: Optional[str]
    listing_id: Optional[str] = None
    listing_title: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.user_id is not None


def report_model(report_type: ReportType) -> type[ListingReport] | type[UserReport]:
    return ListingReport if report_type == ReportType.LISTING else UserReport


def get_report(session: Session, report_type: ReportType, report_id: str) -> Optional[Report]:
    model = report_model(report_type)
    return session.exec(select(model).where(model.id == report_id)).first()


def resolve_target(session: Session, report: Report) -> TargetResolution:
    """Find the account a report is about.

    User reports point at the account directly; listing reports resolve
    through the listing owner. The account itself must exist.
    """
    if isinstance(report, ListingReport):
        listing = get_listing(session, report.listing_id)
        if listing is None:
            return TargetResolution(user_id=None, listing_id=report.listing_id)
        owner = get_user(session, listing.user_id)
        return TargetResolution(
            user_id=owner.id if owner else None,
            listing_id=listing.id,
            listing_title=listing.title,
        )
    target = get_user(session, report.reported_user_id)
    return TargetResolution(user_id=target.id if target else None)


def resolve_report(
    session: Session,
    report_type: ReportType,
    report_id: str,
    status: ReportStatus,
    admin_id: str,
    now: Optional[datetime] = None,
) -> bool:
    """Stamp the review outcome on a report.

    The row may already be gone when a listing was removed together with its
    reports; that case is a no-op and returns ``False``.
    """
    record = get_report(session, report_type, report_id)
    if record is None:
        logger.debug('moderation.report.already_removed', report_id=report_id, report_type=report_type.value)
        return False
    record.status = status
    record.reviewed_at = now or utc_now()
    record.reviewed_by = admin_id
    session.add(record)
    session.flush()
    return True
