from __future__ import annotations

import structlog
from flask import current_app, flash, render_template, request

from blogfolio.wallet.provider import WalletProviderError
from blogfolio.wallet.state import WalletState, is_valid_address, summarize_wallet

from blogfolio.blueprints.site import bp

log = structlog.get_logger(__name__)

SUPPORTED_FEATURES = [
    "Connect / disconnect wallet",
    "Show wallet address",
    "Show account balance",
    "Show ENS name",
    "Show current network",
]

PLANNED_FEATURES = [
    "Switch network",
    "Send transactions",
    "Sign messages",
    "Smart contract interaction",
    "NFT gallery",
    "Transaction history",
]


@bp.get("/wallet")
def wallet():
    """Wallet details for the address the connect widget reported"""
    address = (request.args.get("address") or "").strip()

    state: WalletState | None = None
    if address and not is_valid_address(address):
        flash("Invalid wallet address", "error")
    elif address:
        provider = current_app.extensions["wallet_provider"]
        try:
            state = provider.lookup(address)
        except WalletProviderError as e:
            log.warning("wallet_lookup_failed", address=address, error=str(e))
            flash(f"Could not load wallet details: {e}", "error")
            state = WalletState(address=address, is_connected=True)

    return render_template(
        "wallet.html",
        title="Web3 Wallet",
        wallet=summarize_wallet(state) if state else None,
        supported_features=SUPPORTED_FEATURES,
        planned_features=PLANNED_FEATURES,
    )
