from pydantic import AllowInfNan, BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator
from typing import Annotated, Optional, Dict, Any, Union

# Request schemas. Types are strict: "9.99" is not a price, 1 is not a bool,
# and NaN or Infinity are not prices either.

Price = Union[StrictInt, Annotated[StrictFloat, AllowInfNan(False)]]

class ProductIn(BaseModel):
    name: StrictStr
    description: StrictStr
    price: Price
    category: StrictStr
    in_stock: StrictBool = Field(alias="inStock")

    # unknown keys (including a client supplied "id") are dropped
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

class ProductUpdate(BaseModel):
    name: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    price: Optional[Price] = None
    category: Optional[StrictStr] = None
    in_stock: Optional[StrictBool] = Field(default=None, alias="inStock")

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, v):
        # absent fields keep their defaults; explicit nulls are invalid
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)

def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": p.name,
        "description": p.description,
        "price": p.price,
        "category": p.category,
        "inStock": p.in_stock,
    }
