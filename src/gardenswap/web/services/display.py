"""Display derivations for the swap and order history screens."""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

from gardenswap.config import get_settings
from gardenswap.web.contracts.orders import OrderRecord, OrderRow

PLACEHOLDER = "-"

_FRACTION_RE = re.compile(r"\.(\d+)")

# Checked in order; the first substring found in the chain name wins.
EXPLORER_TX_URLS: list[tuple[str, str]] = [
    ("sepolia", "https://sepolia.etherscan.io/tx/"),
    ("ethereum", "https://etherscan.io/tx/"),
    ("mainnet", "https://etherscan.io/tx/"),
    ("arbitrum_sepolia", "https://sepolia.arbiscan.io/tx/"),
    ("arbitrum", "https://arbiscan.io/tx/"),
    ("polygon", "https://polygonscan.com/tx/"),
    ("base", "https://basescan.org/tx/"),
    ("optimism", "https://optimistic.etherscan.io/tx/"),
]


def truncate_identifier(value: Optional[str]) -> str:
    """Shorten hex addresses to ``first6...last4``; other identifiers pass through."""
    if not value:
        return PLACEHOLDER
    if value.startswith("0x") and len(value) > 10:
        return f"{value[:6]}...{value[-4:]}"
    return value


def short_address(address: Optional[str]) -> str:
    """Connected-wallet banner form of an address."""
    if not address:
        return ""
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # fromisoformat on 3.10 only takes 3 or 6 fraction digits
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_sort_key(value: Optional[str]) -> float:
    """Epoch seconds, or 0 when the timestamp cannot be parsed."""
    parsed = parse_timestamp(value)
    return parsed.timestamp() if parsed else 0.0


def format_date(value: Optional[str]) -> str:
    if not value:
        return PLACEHOLDER
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M:%S %Z")


def explorer_tx_url(tx_hash: Optional[str], chain: Optional[str]) -> Optional[str]:
    """Best-effort block explorer link for an EVM transaction hash."""
    if not tx_hash or not tx_hash.startswith("0x"):
        return None
    chain_lower = (chain or "").lower()
    for needle, base_url in EXPLORER_TX_URLS:
        if needle in chain_lower:
            return f"{base_url}{tx_hash}"
    return None


def order_explorer_url(order_id: Optional[str], explorer_url: Optional[str] = None) -> Optional[str]:
    if not order_id:
        return None
    base = (explorer_url or get_settings().order_explorer_url).rstrip("/")
    return f"{base}/order/{order_id}"


def format_chain_name(chain: Optional[str]) -> str:
    """``arbitrum_sepolia`` -> ``Arbitrum Sepolia``."""
    if not chain:
        return PLACEHOLDER
    return re.sub(r"\b\w", lambda m: m.group().upper(), chain.replace("_", " "))


def format_amount(amount: Optional[str]) -> str:
    """Compact base-unit amount: millions to 6 places, thousands as ``K``."""
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError):
        return PLACEHOLDER
    if not value.is_finite():
        return PLACEHOLDER
    if value > 1_000_000:
        return f"{value / 1_000_000:.6f}"
    if value > 1_000:
        return f"{value / 1_000:.3f}K"
    return format(value.normalize(), "f")


def to_row(record: OrderRecord, explorer_url: Optional[str] = None) -> OrderRow:
    """Project a normalized order into a history table row."""
    order_id = record.order_id or PLACEHOLDER
    return OrderRow(
        date=format_date(record.created_at),
        order_id=order_id,
        order_id_short=f"{order_id[:8]}..." if record.order_id else PLACEHOLDER,
        order_url=order_explorer_url(record.order_id, explorer_url),
        status=record.status,
        source_chain=format_chain_name(record.source_chain),
        destination_chain=format_chain_name(record.destination_chain),
        amounts=f"{format_amount(record.source_amount)} → {format_amount(record.destination_amount)}",
        assets=(
            f"{truncate_identifier(record.source_asset)} → "
            f"{truncate_identifier(record.destination_asset)}"
        ),
        initiate_tx=record.initiate_tx_hash,
        initiate_tx_url=explorer_tx_url(record.initiate_tx_hash, record.source_chain),
        redeem_tx=record.redeem_tx_hash,
        redeem_tx_url=explorer_tx_url(record.redeem_tx_hash, record.destination_chain),
    )
