"""Product and Report API Schemas

Pydantic models for the product-sale records and the month-scoped report
endpoints:

1. Product records (seed input and search output)
2. Paginated product search
3. Monthly statistics
4. Price-range bar chart
5. Category pie chart
6. The combined report

Wire names are the camelCase keys the dashboards consume; Python code uses
snake_case and relies on aliases (``populate_by_name`` lets services build
responses with the snake_case names)."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


# 1. Product records
class ProductTransactionBase(BaseModel):
    id: int = Field(..., description="Identifier assigned by the seed dataset")
    title: str
    description: str
    price: float = Field(..., ge=0, description="Sale price")
    category: str
    image: Optional[str] = None
    sold: bool
    date_of_sale: str = Field(
        ..., alias="dateOfSale", description="Sale date as text, YYYY-MM-DD..."
    )

    model_config = ConfigDict(populate_by_name=True)


class ProductTransactionIn(ProductTransactionBase):
    """One element of the seed dataset."""


class ProductTransactionResponse(ProductTransactionBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


# 2. Paginated search
class ProductPageResponse(BaseModel):
    data: List[ProductTransactionResponse]
    total_records: int = Field(..., alias="totalRecords")

    model_config = ConfigDict(populate_by_name=True)


# 3. Monthly statistics
class StatisticsResponse(BaseModel):
    total_sale_amount: float = Field(..., alias="totalSaleAmtOfMth")
    total_sold: int = Field(..., alias="totalSoldPerMonth")
    total_not_sold: int = Field(..., alias="totalNotSoldPerMonth")

    model_config = ConfigDict(populate_by_name=True)


# 4. Bar chart
class PriceRangeCount(BaseModel):
    range: str
    count: int


# 5. Pie chart
class CategoryBreakdownResponse(BaseModel):
    total: Dict[str, int]


# 6. Combined
class CombinedReportResponse(BaseModel):
    statistics: StatisticsResponse
    barchart: List[PriceRangeCount]
    piechart: CategoryBreakdownResponse


class SeedResponse(BaseModel):
    message: str
