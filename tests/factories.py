from typing import Optional
from uuid import uuid4

from sqlmodel import Session

from app.models.enums import UserRole
from app.models.favorite import Favorite
from app.models.listing import Listing
from app.models.report import ListingReport, UserReport
from app.models.user import User


def make_user(session: Session, role: UserRole = UserRole.USER, **fields) -> User:
    user = User(email=f"{uuid4()}@campus.edu", role=role, **fields)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_admin(session: Session) -> User:
    return make_user(session, role=UserRole.ADMIN)


def make_listing(session: Session, owner: User, title: str = 'Calculus textbook') -> Listing:
    listing = Listing(user_id=owner.id, title=title, price=25.0)
    session.add(listing)
    session.commit()
    session.refresh(listing)
    return listing


def make_favorite(session: Session, user: User, listing: Listing) -> Favorite:
    favorite = Favorite(user_id=user.id, listing_id=listing.id)
    session.add(favorite)
    session.commit()
    session.refresh(favorite)
    return favorite


def make_listing_report(
    session: Session,
    reporter: User,
    listing_id: str,
    reason: str = 'spam',
) -> ListingReport:
    report = ListingReport(reporter_id=reporter.id, listing_id=listing_id, reason=reason)
    session.add(report)
    session.commit()
    session.refresh(report)
    return report


def make_user_report(
    session: Session,
    reporter: User,
    reported_user_id: str,
    reason: str = 'harassment',
    description: Optional[str] = None,
) -> UserReport:
    report = UserReport(
        reporter_id=reporter.id,
        reported_user_id=reported_user_id,
        reason=reason,
        description=description,
    )
    session.add(report)
    session.commit()
    session.refresh(report)
    return report
