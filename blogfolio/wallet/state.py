from __future__ import annotations

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from pydantic import BaseModel

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

UNKNOWN_NETWORK = "Unknown network"


class Balance(BaseModel):
    value: int  # smallest unit (wei)
    decimals: int = 18
    symbol: str = "ETH"

    @property
    def amount(self) -> Decimal:
        return Decimal(self.value).scaleb(-self.decimals)


class WalletState(BaseModel):
    """Connection state handed to us by the wallet provider; never mutated here."""

    address: str | None = None
    is_connected: bool = False
    chain_id: int | None = None
    chain_name: str | None = None
    balance: Balance | None = None
    ens_name: str | None = None


def is_valid_address(address: str | None) -> bool:
    return bool(address and ADDRESS_RE.match(address))


def short_address(address: str | None) -> str:
    if not address:
        return ""
    return f"{address[:6]}...{address[-4:]}"


def format_balance(balance: Balance | None) -> str:
    if balance is None:
        return "0 ETH"
    amount = balance.amount.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)
    return f"{amount} {balance.symbol}"


def summarize_wallet(state: WalletState) -> dict[str, Any]:
    """Display-ready values for the wallet info card."""
    return {
        "is_connected": state.is_connected,
        "network": state.chain_name or UNKNOWN_NETWORK,
        "address": state.address,
        "short_address": short_address(state.address),
        "balance": format_balance(state.balance),
        "ens_name": state.ens_name or None,
    }
