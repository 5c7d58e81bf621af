#!/usr/bin/env python3
"""Escrow Ledger — local end-to-end simulation.

Runs scenarios in-process against an in-memory account book, with the
same account layout a local dev chain hands out (deployer = seller and
owner, second account = escrow agent, further accounts = buyers).

    Scenario 1: Happy Path
        - Buyer deposits the default price (0.005)
        - Escrow agent releases -> seller paid, sale ID minted

    Scenario 2: Repricing and Refund
        - Owner raises the price to 0.008
        - Buyer sends the old price -> INVALID_PAYMENT_AMOUNT
        - Buyer sends the new price -> deposit held
        - Escrow agent cancels -> buyer refunded, no sale ID

    Scenario 3: Rejected Calls
        - Buyer tries to release its own deposit -> UNAUTHORIZED
        - Agent cancels a buyer with no deposit -> NO_FUNDS_DEPOSITED
        - Seller refuses payment -> TRANSFER_FAILED, deposit still held

Usage:
    python simulation.py
    python simulation.py --scenario 2
    python simulation.py --json-logs
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from escrow_ledger.domain.exceptions import EscrowLedgerError
from escrow_ledger.domain.units import format_ether, parse_ether
from escrow_ledger.logging_config import get_logger, setup_logging
from escrow_ledger.services.escrow_service import EscrowLedger
from escrow_ledger.services.payment_service import PaymentService

logger = get_logger("simulation")

DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
AGENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
BUYER = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
BUYER_2 = "0x90F79bf6EB2c4f870365E96c7B6BcC78b3B9e39a"
CUSTODY = "0x000000000000000000000000000000000000e5c0"

FAUCET = parse_ether("10")


@dataclass
class World:
    """One freshly deployed ledger and its account book."""

    ledger: EscrowLedger
    payments: PaymentService


def deploy() -> World:
    payments = PaymentService(balances={CUSTODY: 0}, opening_balance=FAUCET)
    ledger = EscrowLedger(
        seller=DEPLOYER,
        escrow_agent=AGENT,
        owner=DEPLOYER,
        transfer=payments,
        custody=CUSTODY,
    )
    return World(ledger=ledger, payments=payments)


def expect_rejection(code: str, action, *args) -> None:
    """Run ``action`` and check that the ledger rejects it with ``code``."""
    try:
        action(*args)
    except EscrowLedgerError as exc:
        if exc.code != code:
            raise
        logger.info("simulation.rejected_as_expected", code=exc.code, message=exc.message)
        return
    raise AssertionError(f"expected {code}, call succeeded")


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def scenario_happy_path() -> None:
    world = deploy()
    ledger = world.ledger
    seller_before = world.payments.balance_of(DEPLOYER)

    ledger.deposit_funds(BUYER, ledger.price)
    logger.info(
        "simulation.deposited",
        buyer=BUYER,
        deposit=format_ether(ledger.get_deposit(BUYER)),
        held=format_ether(ledger.held_balance),
    )

    sale = ledger.release_funds(AGENT, BUYER)
    seller_gain = world.payments.balance_of(DEPLOYER) - seller_before
    logger.info(
        "simulation.released",
        sale_id=sale.sale_id,
        seller_gain=format_ether(seller_gain),
        sale_ids=ledger.get_sale_ids(BUYER),
    )


def scenario_reprice_and_refund() -> None:
    world = deploy()
    ledger = world.ledger

    ledger.set_price(DEPLOYER, parse_ether("0.008"))
    expect_rejection("INVALID_PAYMENT_AMOUNT", ledger.deposit_funds, BUYER, parse_ether("0.005"))

    ledger.deposit_funds(BUYER, parse_ether("0.008"))
    buyer_after_deposit = world.payments.balance_of(BUYER)

    refund = ledger.cancel_transaction(AGENT, BUYER)
    logger.info(
        "simulation.refunded",
        amount=format_ether(refund.amount),
        buyer_gain=format_ether(world.payments.balance_of(BUYER) - buyer_after_deposit),
        sale_ids=ledger.get_sale_ids(BUYER),
    )


def scenario_rejected_calls() -> None:
    world = deploy()
    ledger = world.ledger

    ledger.deposit_funds(BUYER, ledger.price)
    expect_rejection("UNAUTHORIZED", ledger.release_funds, BUYER, BUYER)
    expect_rejection("NO_FUNDS_DEPOSITED", ledger.cancel_transaction, AGENT, BUYER_2)

    world.payments.reject_payments_to(DEPLOYER)
    expect_rejection("TRANSFER_FAILED", ledger.release_funds, AGENT, BUYER)
    logger.info(
        "simulation.still_held",
        deposit=format_ether(ledger.get_deposit(BUYER)),
        held=format_ether(ledger.held_balance),
    )


SCENARIOS = {
    1: scenario_happy_path,
    2: scenario_reprice_and_refund,
    3: scenario_rejected_calls,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Escrow Ledger Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        choices=sorted(SCENARIOS),
        help="Run a specific scenario (default: all)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines instead of the console format",
    )
    args = parser.parse_args()

    setup_logging(log_level="INFO", json_logs=args.json_logs)

    selected = [args.scenario] if args.scenario else sorted(SCENARIOS)
    for number in selected:
        logger.info("simulation.scenario_start", scenario=number)
        SCENARIOS[number]()
        logger.info("simulation.scenario_done", scenario=number)


if __name__ == "__main__":
    main()
