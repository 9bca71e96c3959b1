"""
Cart API Pydantic Models

Request bodies sent to the remote cart service.
"""
from pydantic import BaseModel, ConfigDict, Field


class AddToCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId", min_length=1)
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId", min_length=1)
    quantity: int = 1
    cart_item_id: str | None = Field(default=None, alias="cartItemId")
