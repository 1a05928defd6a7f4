"""Injecting a wallet configuration into a chain of config-agnostic steps.

Only the last step needs the configuration; it asks for it with ``asks`` and
receives it when the whole chain is run.
"""

from __future__ import annotations

from dataclasses import dataclass

from freefx import MFnWrapper, asks, wrap


@dataclass(frozen=True)
class WalletConfig:
    currency: str
    fee_percent: int


@dataclass(frozen=True)
class Wallet:
    owner: str
    cents: int


def with_fee(cents: int) -> MFnWrapper[WalletConfig, int]:
    return asks(lambda cfg: cents - cents * cfg.fee_percent // 100)


def formatted(cents: int) -> MFnWrapper[WalletConfig, str]:
    return asks(lambda cfg: f"{cents / 100:.2f} {cfg.currency}")


def withdraw(wallet: Wallet, cents: int) -> MFnWrapper[WalletConfig, str]:
    return (
        wrap(lambda _cfg: wallet.cents)
        .map(lambda balance: min(balance, cents))
        .flat_map(with_fee)
        .flat_map(formatted)
    )


if __name__ == "__main__":
    wallet = Wallet(owner="ada", cents=10_000)
    payout = withdraw(wallet, 2_500)
    print(payout.run(WalletConfig(currency="EUR", fee_percent=2)))
    print(payout.run(WalletConfig(currency="USD", fee_percent=0)))
