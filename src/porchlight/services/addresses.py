"""Address normalization, lookup and search."""
from __future__ import annotations

import logging

from sqlalchemy import ColumnElement, or_, select
from sqlalchemy.orm import Session, selectinload

from porchlight.core.settings import settings
from porchlight.db.time import ensure_aware
from porchlight.models import Address, Answer, Review
from porchlight.schemas.address import AddressSuggestion
from porchlight.services.errors import InvalidRequestError, NotFoundError
from porchlight.services.scoring import ReviewSummary, summarize_address_reviews

__all__ = [
    "autocomplete_addresses",
    "find_or_create_address",
    "format_address",
    "get_address",
    "search_addresses",
]

logger = logging.getLogger(__name__)

_REVIEWS_WITH_ANSWERS = (
    selectinload(Address.reviews)
    .selectinload(Review.answers)
    .selectinload(Answer.question)
)


def format_address(street_address: str, city: str, state: str, zip_code: str) -> str:
    """Return the canonical form used as the address natural key."""
    return f"{street_address.strip()}, {city.strip()}, {state.strip()} {zip_code.strip()}".lower()


def find_or_create_address(
    db: Session,
    *,
    street_address: str,
    city: str,
    state: str,
    zip_code: str,
) -> Address:
    """Return the address matching the formatted key, creating it if needed.

    New rows are flushed but not committed; the caller owns the transaction.
    """
    formatted = format_address(street_address, city, state, zip_code)
    address = db.scalars(
        select(Address).where(Address.formatted_address == formatted)
    ).first()
    if address is not None:
        return address

    address = Address(
        street_address=street_address.strip(),
        city=city.strip(),
        state=state.strip(),
        zip_code=zip_code.strip(),
        formatted_address=formatted,
    )
    db.add(address)
    db.flush()
    logger.info("Created address %s (%s)", address.id, formatted)
    return address


def _newest_first(address: Address) -> list[Review]:
    return sorted(
        address.reviews,
        key=lambda review: (ensure_aware(review.created_at), review.id or 0),
        reverse=True,
    )


def _matches(query: str) -> ColumnElement[bool]:
    return or_(
        Address.street_address.icontains(query, autoescape=True),
        Address.city.icontains(query, autoescape=True),
        Address.state.icontains(query, autoescape=True),
        Address.zip_code.icontains(query, autoescape=True),
        Address.formatted_address.icontains(query, autoescape=True),
    )


def get_address(db: Session, address_id: int) -> tuple[Address, ReviewSummary]:
    """Return an address and the summary of its reviews.

    Raises:
        NotFoundError: If no address has ``address_id``.
    """
    address = db.scalars(
        select(Address).where(Address.id == address_id).options(_REVIEWS_WITH_ANSWERS)
    ).first()
    if address is None:
        raise NotFoundError("Address not found")
    return address, summarize_address_reviews(_newest_first(address))


def search_addresses(db: Session, query: str) -> list[tuple[Address, ReviewSummary]]:
    """Search addresses by any address field, ordered by city.

    Raises:
        InvalidRequestError: If the query is shorter than the configured minimum.
    """
    query = query.strip()
    if len(query) < settings.search_min_query_length:
        raise InvalidRequestError(
            f"Search query must be at least {settings.search_min_query_length} characters"
        )

    addresses = db.scalars(
        select(Address)
        .where(_matches(query))
        .options(_REVIEWS_WITH_ANSWERS)
        .order_by(Address.city.asc(), Address.id.asc())
        .limit(settings.search_result_limit)
    ).all()
    return [(address, summarize_address_reviews(_newest_first(address))) for address in addresses]


def autocomplete_addresses(db: Session, query: str) -> list[AddressSuggestion]:
    """Return address suggestions for a partial query, most reviewed first.

    Queries shorter than the configured minimum yield no suggestions.
    """
    query = query.strip()
    if len(query) < settings.autocomplete_min_query_length:
        return []

    addresses = db.scalars(
        select(Address)
        .where(_matches(query))
        .options(selectinload(Address.reviews).selectinload(Review.answers))
        .order_by(Address.city.asc(), Address.id.asc())
        .limit(settings.autocomplete_limit)
    ).all()
    suggestions = [
        AddressSuggestion(
            id=address.id,
            display=address.display,
            review_count=summarize_address_reviews(_newest_first(address)).review_count,
        )
        for address in addresses
    ]
    # Stable sort keeps city order among equally reviewed addresses.
    suggestions.sort(key=lambda suggestion: suggestion.review_count, reverse=True)
    return suggestions
