from pydantic import BaseModel, ConfigDict, Field, StrictStr


# --- Receipts ---

class ItemIn(BaseModel):
    short_description: StrictStr = Field(alias="shortDescription")
    price: StrictStr  # decimal amount as text, e.g. "6.49"

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ReceiptIn(BaseModel):
    retailer: StrictStr
    purchase_date: StrictStr = Field(alias="purchaseDate")  # YYYY-MM-DD
    purchase_time: StrictStr = Field(alias="purchaseTime")  # HH:MM, 24-hour
    items: list[ItemIn]
    total: StrictStr

    model_config = ConfigDict(populate_by_name=True, frozen=True)
