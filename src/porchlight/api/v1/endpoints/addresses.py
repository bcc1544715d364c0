# src/porchlight/api/v1/endpoints/addresses.py
"""Address search and detail endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from porchlight.schemas.address import AddressSummaryResponse, AutocompleteResponse
from porchlight.services import addresses as address_service
from porchlight.services.errors import ServiceError
from porchlight.services.serializers import to_address_summary

from ..dependencies import SessionDep, http_error

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("/", response_model=list[AddressSummaryResponse])
async def search_addresses(
    db: SessionDep,
    query: Annotated[str, Query(max_length=255)] = "",
) -> list[AddressSummaryResponse]:
    """Search addresses and report each one's rating."""
    try:
        results = address_service.search_addresses(db, query)
    except ServiceError as err:
        raise http_error(err) from err
    return [to_address_summary(address, summary) for address, summary in results]


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(
    db: SessionDep,
    query: Annotated[str, Query(max_length=255)] = "",
) -> AutocompleteResponse:
    """Suggest addresses for a partially typed query."""
    return AutocompleteResponse(suggestions=address_service.autocomplete_addresses(db, query))


@router.get("/{address_id}", response_model=AddressSummaryResponse)
async def get_address(address_id: int, db: SessionDep) -> AddressSummaryResponse:
    """Get an address with its deduplicated reviews and overall rating."""
    try:
        address, summary = address_service.get_address(db, address_id)
    except ServiceError as err:
        raise http_error(err) from err
    return to_address_summary(address, summary)


