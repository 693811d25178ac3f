"""Read-only wallet lookups over Ethereum JSON-RPC."""
from __future__ import annotations

from itertools import count
from typing import Any, NamedTuple

import requests
import structlog
from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import decode_hex, keccak

from blogfolio.wallet.state import Balance, WalletState

log = structlog.get_logger(__name__)


class Chain(NamedTuple):
    name: str
    symbol: str
    decimals: int = 18


CHAINS: dict[int, Chain] = {
    1: Chain("Ethereum", "ETH"),
    11155111: Chain("Sepolia", "ETH"),
}

# ENS registry, deployed at the same address on mainnet and Sepolia
ENS_REGISTRY = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
ZERO_ADDRESS = "0x" + "0" * 40

RESOLVER_SELECTOR = keccak(text="resolver(bytes32)")[:4]
NAME_SELECTOR = keccak(text="name(bytes32)")[:4]
ADDR_SELECTOR = keccak(text="addr(bytes32)")[:4]


class WalletProviderError(Exception):
    pass


def namehash(name: str) -> bytes:
    """EIP-137 namehash of a dotted ENS name."""
    node = b"\x00" * 32
    if name:
        for label in reversed(name.lower().split(".")):
            node = keccak(node + keccak(text=label))
    return node


def reverse_node(address: str) -> bytes:
    return namehash(f"{address.lower()[2:]}.addr.reverse")


class RpcWalletProvider:
    def __init__(self, rpc_url: str, *, timeout: float = 10.0, session: requests.Session | None = None):
        if not rpc_url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid RPC URL '{rpc_url}'. Only HTTP/HTTPS allowed.")
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = count(1)

    def _call(self, method: str, params: list[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            raise WalletProviderError(f"{method} failed: {e}") from e

        if not isinstance(body, dict):
            raise WalletProviderError(f"{method} failed: unexpected response")
        if body.get("error"):
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise WalletProviderError(f"{method} failed: {message}")
        return body.get("result")

    def _quantity(self, method: str, params: list[Any]) -> int:
        result = self._call(method, params)
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise WalletProviderError(f"{method} returned an invalid quantity: {result!r}") from e

    def _eth_call(self, to: str, selector: bytes, node: bytes, output_type: str) -> Any:
        """Call a single-argument ``(bytes32)`` contract view and decode its one return value.

        Returns None when the call returns no data.
        """
        data = "0x" + (selector + node).hex()
        result = self._call("eth_call", [{"to": to, "data": data}, "latest"])
        try:
            raw = decode_hex(result or "0x")
            if not raw:
                return None
            return decode([output_type], raw)[0]
        except (DecodingError, ValueError, TypeError) as e:
            raise WalletProviderError(f"eth_call returned undecodable data: {result!r}") from e

    def _resolver(self, node: bytes) -> str | None:
        resolver = self._eth_call(ENS_REGISTRY, RESOLVER_SELECTOR, node, "address")
        if not resolver or resolver.lower() == ZERO_ADDRESS:
            return None
        return resolver

    def chain_id(self) -> int:
        return self._quantity("eth_chainId", [])

    def balance(self, address: str, chain: Chain | None = None) -> Balance:
        chain = chain or Chain("Ethereum", "ETH")
        value = self._quantity("eth_getBalance", [address, "latest"])
        return Balance(value=value, decimals=chain.decimals, symbol=chain.symbol)

    def ens_name(self, address: str) -> str | None:
        """Primary ENS name of an address.

        Reads the reverse record, then resolves that name forward and only
        returns it when it points back at the same address.
        """
        node = reverse_node(address)
        resolver = self._resolver(node)
        if resolver is None:
            return None
        name = self._eth_call(resolver, NAME_SELECTOR, node, "string")
        if not name:
            return None

        forward_node = namehash(name)
        forward_resolver = self._resolver(forward_node)
        if forward_resolver is None:
            return None
        resolved = self._eth_call(forward_resolver, ADDR_SELECTOR, forward_node, "address")
        if not resolved or resolved.lower() != address.lower():
            log.info("ens_name_mismatch", address=address, name=name)
            return None
        return name

    def lookup(self, address: str) -> WalletState:
        """Current network, balance and ENS name for an address the wallet widget connected."""
        chain_id = self.chain_id()
        chain = CHAINS.get(chain_id)
        balance = self.balance(address, chain)

        ens_name = None
        if chain is not None:
            try:
                ens_name = self.ens_name(address)
            except WalletProviderError as e:
                log.warning("ens_lookup_failed", address=address, error=str(e))

        log.info("wallet_lookup", chain_id=chain_id, address=address, ens_name=ens_name)
        return WalletState(
            address=address,
            is_connected=True,
            chain_id=chain_id,
            chain_name=chain.name if chain else None,
            balance=balance,
            ens_name=ens_name,
        )
