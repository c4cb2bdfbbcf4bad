"""Reward-points rules for purchase receipts.

Every rule is independent and additive; a receipt's points are the sum of
the per-rule contributions returned by ``score_breakdown``.
"""
import enum
import logging
import math
import re

from rewards.schemas import ReceiptIn

logger = logging.getLogger("rewards")

POINTS_PER_RETAILER_CHAR = 1
POINTS_ROUND_DOLLAR = 50
POINTS_QUARTER_MULTIPLE = 25
POINTS_PER_ITEM_PAIR = 5
DESCRIPTION_LENGTH_FACTOR = 3
DESCRIPTION_PRICE_MULTIPLIER = 0.2
POINTS_ODD_DAY = 6
POINTS_AFTERNOON = 10
AFTERNOON_START = 1400  # exclusive
AFTERNOON_END = 1600  # exclusive

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_AMOUNT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

# Unicode White_Space; the \x1c-\x1f separators are not trimmed.
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000"
)


class ParsePolicy(str, enum.Enum):
    TREAT_AS_ZERO = "zero"
    REJECT = "reject"


class ReceiptParseError(ValueError):
    """A receipt field could not be parsed as the number it should hold."""

    def __init__(self, field: str, value: str, message: str):
        super().__init__(f"{field}: {message} ({value!r})")
        self.field = field
        self.value = value
        self.message = message


# --- Parsing helpers ---

def _parse_amount(field: str, value: str) -> float:
    if not _AMOUNT_RE.fullmatch(value):
        raise ReceiptParseError(field, value, "not a decimal amount")
    amount = float(value)
    if not math.isfinite(amount):
        raise ReceiptParseError(field, value, "amount must be finite")
    return amount


def _parse_int(field: str, value: str) -> int:
    if not _INTEGER_RE.fullmatch(value):
        raise ReceiptParseError(field, value, "not an integer")
    return int(value)


def _lenient(parse, field: str, value: str, policy: ParsePolicy):
    """Run a parser, mapping failure to zero unless the policy rejects it."""
    try:
        return parse(field, value)
    except ReceiptParseError as e:
        if policy is ParsePolicy.REJECT:
            raise
        logger.warning(
            "Receipt field treated as zero",
            extra={"extra_data": {"field": e.field, "value": e.value, "reason": e.message}},
        )
        return 0


# --- Rules ---

def retailer_points(retailer: str) -> int:
    return sum(POINTS_PER_RETAILER_CHAR for ch in retailer if ch.isalnum())


def round_dollar_points(total: float) -> int:
    return POINTS_ROUND_DOLLAR if float(total).is_integer() else 0


def quarter_multiple_points(total: float) -> int:
    # Exact float remainder; non-dyadic totals never hit 0.0 here.
    return POINTS_QUARTER_MULTIPLE if math.fmod(total, 0.25) == 0.0 else 0


def item_pair_points(item_count: int) -> int:
    return item_count // 2 * POINTS_PER_ITEM_PAIR


def description_points(description: str, price: float) -> int:
    """Points for one item whose trimmed description length is a multiple of 3.

    Length is measured in UTF-8 bytes.
    """
    trimmed = description.strip(WHITESPACE)
    if len(trimmed.encode("utf-8")) % DESCRIPTION_LENGTH_FACTOR != 0:
        return 0
    return math.ceil(price * DESCRIPTION_PRICE_MULTIPLIER)


def odd_day_points(day: int) -> int:
    return POINTS_ODD_DAY if day % 2 != 0 else 0


def afternoon_points(hhmm: int) -> int:
    return POINTS_AFTERNOON if AFTERNOON_START < hhmm < AFTERNOON_END else 0


# --- Main entry ---

def score_breakdown(receipt: ReceiptIn, policy: ParsePolicy = ParsePolicy.TREAT_AS_ZERO) -> dict[str, int]:
    """Return each rule's contribution for ``receipt``, keyed by rule name.

    Raises ReceiptParseError under ``ParsePolicy.REJECT`` when a numeric,
    date or time field is malformed; otherwise such fields count as zero.
    """
    total = _lenient(_parse_amount, "total", receipt.total, policy)

    description = 0
    for i, item in enumerate(receipt.items):
        price = _lenient(_parse_amount, f"items[{i}].price", item.price, policy)
        description += description_points(item.short_description, price)

    day = _lenient(_parse_int, "purchaseDate", receipt.purchase_date.split("-")[-1], policy)
    hhmm = _lenient(_parse_int, "purchaseTime", receipt.purchase_time.replace(":", "", 1), policy)

    return {
        "retailer": retailer_points(receipt.retailer),
        "round_dollar": round_dollar_points(total),
        "quarter_multiple": quarter_multiple_points(total),
        "item_pairs": item_pair_points(len(receipt.items)),
        "description": description,
        "odd_day": odd_day_points(day),
        "afternoon": afternoon_points(hhmm),
    }


def score_receipt(receipt: ReceiptIn, policy: ParsePolicy = ParsePolicy.TREAT_AS_ZERO) -> int:
    """Compute the reward points for a receipt."""
    breakdown = score_breakdown(receipt, policy)
    points = sum(breakdown.values())
    logger.debug("Receipt scored", extra={"extra_data": {"points": points, "breakdown": breakdown}})
    return points
