"""
Pydantic schemas for the swap calculator endpoints.
"""

from typing import List

from pydantic import BaseModel


class TokenPriceRead(BaseModel):
    currency: str
    price: float
    date: str


class PriceList(BaseModel):
    prices: List[TokenPriceRead]
    count: int


class SwapQuoteRead(BaseModel):
    """A forward or reverse quote for swapping ``from_currency`` into ``to_currency``."""

    from_currency: str
    to_currency: str
    rate: float
    input_amount: float
    output_amount: float
    reverse: bool
    info: str
