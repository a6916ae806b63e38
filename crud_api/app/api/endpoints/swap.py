"""
Swap calculator endpoints.

Prices are read from the remote feed on every request.  The handlers are
plain ``def`` functions so FastAPI runs the blocking ``requests`` call in
its threadpool.
"""

from fastapi import APIRouter, Query, Request

from crud_api.app.schemas.swap import PriceList, SwapQuoteRead
from crud_api.app.services import swap_service

router = APIRouter()


@router.get("/prices", response_model=PriceList)
def list_prices(request: Request) -> PriceList:
    """Latest price per currency, sorted by currency symbol."""
    prices = request.app.state.price_feed.latest_prices()
    rows = [prices[currency].as_dict() for currency in sorted(prices)]
    return PriceList(prices=rows, count=len(rows))


@router.get("/quote", response_model=SwapQuoteRead)
def get_quote(
    request: Request,
    from_currency: str = Query(..., alias="from", min_length=1),
    to_currency: str = Query(..., alias="to", min_length=1),
    amount: float = Query(..., description="Amount to send, or to receive when reverse=true"),
    reverse: bool = Query(False),
) -> SwapQuoteRead:
    prices = request.app.state.price_feed.latest_prices()
    result = swap_service.quote(prices, from_currency, to_currency, amount, reverse=reverse)
    return SwapQuoteRead(**result.as_dict())
