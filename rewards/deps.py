import uuid
from typing import Callable

from fastapi import Request

from rewards.scoring import ParsePolicy
from rewards.store import ScoreStore

IdFactory = Callable[[], str]


def generate_receipt_id() -> str:
    return str(uuid.uuid4())


def get_store(request: Request) -> ScoreStore:
    return request.app.state.store


def get_id_factory(request: Request) -> IdFactory:
    return request.app.state.id_factory


def get_parse_policy(request: Request) -> ParsePolicy:
    """Policy for receipt fields that fail to parse, fixed at app creation."""
    return request.app.state.parse_policy
