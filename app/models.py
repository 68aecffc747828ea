# app/models.py
from pydantic import BaseModel, Field
from typing import Dict, List, Union

# Response shapes, used as FastAPI response models.

class Product(BaseModel):
    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(alias="inStock")

class ProductPage(BaseModel):
    total: int
    page: int
    limit: int
    results: List[Product]

class ProductStats(BaseModel):
    total_products: int = Field(alias="totalProducts")
    count_by_category: Dict[str, int] = Field(alias="countByCategory")

class Message(BaseModel):
    message: str
