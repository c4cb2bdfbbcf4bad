import pytest
from fastapi.testclient import TestClient

from rewards.main import create_app
from rewards.schemas import ItemIn, ReceiptIn
from rewards.scoring import ParsePolicy
from rewards.store import ScoreStore

TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}


def make_receipt(**overrides) -> ReceiptIn:
    """A receipt that scores 0 on every rule unless overridden."""
    fields = {
        "retailer": "",
        "purchase_date": "2022-01-02",
        "purchase_time": "09:00",
        "items": [],
        "total": "0.01",
    }
    fields.update(overrides)
    fields["items"] = [i if isinstance(i, ItemIn) else ItemIn(**i) for i in fields["items"]]
    return ReceiptIn(**fields)


@pytest.fixture
def store():
    return ScoreStore()


@pytest.fixture
def client(store):
    app = create_app(store=store, parse_policy=ParsePolicy.TREAT_AS_ZERO)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def strict_client():
    app = create_app(store=ScoreStore(), parse_policy=ParsePolicy.REJECT)
    with TestClient(app) as c:
        yield c
