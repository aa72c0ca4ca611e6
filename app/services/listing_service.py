from dataclasses import dataclass
from typing import Optional
from loguru import logger
from sqlmodel import Session, select
from app.models.favorite import Favorite
from app.models.listing import Listing
from app.models.report import ListingReport


@dataclass(frozen=True)
class RemediationResult:
    listing_id: str
    favorites_removed: int
    reports_removed: int
    listing_removed: bool


def get_listing(session: Session, listing_id: str) -> Optional[Listing]:
    return session.exec(select(Listing).where(Listing.id == listing_id)).first()


def _delete_all(session: Session, records: list) -> int:
    for record in records:
        session.delete(record)
    session.flush()
    return len(records)


def remove_listing(session: Session, listing_id: str) -> RemediationResult:
    """Delete a listing together with its favorites and every report about it.

    Dependent rows go first so the listing is never removed while rows still
    point at it. Missing rows are skipped.
    """
    favorites = session.exec(select(Favorite).where(Favorite.listing_id == listing_id)).all()
    favorites_removed = _delete_all(session, list(favorites))

    reports = session.exec(select(ListingReport).where(ListingReport.listing_id == listing_id)).all()
    reports_removed = _delete_all(session, list(reports))

    listing = get_listing(session, listing_id)
    listing_removed = listing is not None
    if listing is not None:
        _delete_all(session, [listing])

    logger.info(
        'moderation.listing.removed',
        listing_id=listing_id,
        favorites_removed=favorites_removed,
        reports_removed=reports_removed,
        listing_removed=listing_removed,
    )
    return RemediationResult(
        listing_id=listing_id,
        favorites_removed=favorites_removed,
        reports_removed=reports_removed,
        listing_removed=listing_removed,
    )
