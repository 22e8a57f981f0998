"""The four self-send stages, in the order they must run."""

from __future__ import annotations

import logging

from wallet_e2e_tester.configuration.runtime_settings import HarnessSettings, RunConfig
from wallet_e2e_tester.stage_sequencing.stage_contracts import Stage, StageContext, StageResult
from wallet_e2e_tester.transaction_watching import dapp_page
from wallet_e2e_tester.transaction_watching.confirmation_watcher import (
    TransactionConfirmationWatcher,
    TransferRequest,
)
from wallet_e2e_tester.transaction_watching.receipt_models import RECEIPT_SUCCESS_STATUS

logger = logging.getLogger(__name__)

SETUP_STAGE_NAME = "Setup wallet and dApp"
SEND_STAGE_NAME = "Send an EIP-1559 transaction and verify success"


def add_network_stage_name(network_name: str) -> str:
    return f"Add {network_name} network"


def connect_stage_name(expected_sender: str) -> str:
    return f"Connect wallet with {expected_sender}"


def build_self_send_stages(config: RunConfig, settings: HarnessSettings) -> tuple[Stage, ...]:
    """Return the self-send stages with their deadlines."""
    timeouts = settings.timeouts
    return (
        Stage(SETUP_STAGE_NAME, setup_wallet_and_dapp, timeouts.setup_stage_seconds),
        Stage(
            add_network_stage_name(settings.network.name),
            add_network,
            timeouts.network_stage_seconds,
        ),
        Stage(
            connect_stage_name(config.expected_sender),
            connect_wallet,
            timeouts.connect_stage_seconds,
        ),
        Stage(SEND_STAGE_NAME, send_transaction_and_verify, timeouts.transaction_stage_seconds),
    )


async def setup_wallet_and_dapp(context: StageContext) -> StageResult:
    logger.info("Setting up wallet and dApp...")
    session = await context.start_session()
    await context.require_wallet().setup_wallet(
        context.config.secret_material, context.settings.browser.wallet_password
    )
    await session.goto(context.config.dapp_url)
    logger.info("Setup wallet and dApp")
    return StageResult.passed(SETUP_STAGE_NAME)


async def add_network(context: StageContext) -> StageResult:
    network = context.settings.network.with_rpc_url(context.config.rpc_url)
    stage_name = add_network_stage_name(network.name)
    logger.info("Adding %s network...", network.name)
    await context.require_wallet().add_network(network)

    expected_chain_id = network.expected_chain_id_hex
    observed = await context.require_session().wait_for_text(
        dapp_page.CHAIN_ID_FIELD,
        expected_chain_id,
        timeout_seconds=context.settings.timeouts.ui_assertion_seconds,
    )
    if observed != expected_chain_id:
        return StageResult.failed(
            stage_name, f"Expected chain id {expected_chain_id}, dApp shows {observed!r}."
        )
    logger.info("Added %s network", network.name)
    return StageResult.passed(stage_name)


async def connect_wallet(context: StageContext) -> StageResult:
    expected_sender = context.config.expected_sender
    stage_name = connect_stage_name(expected_sender)
    logger.info("Connecting wallet with %s...", expected_sender)
    session = context.require_session()
    await session.click(dapp_page.CONNECT_BUTTON)
    await context.require_wallet().accept_access()

    observed = await session.wait_for_text(
        dapp_page.ACCOUNTS_FIELD,
        expected_sender,
        timeout_seconds=context.settings.timeouts.ui_assertion_seconds,
        normalize=str.lower,
    )
    if observed.lower() != expected_sender.lower():
        return StageResult.failed(
            stage_name, f"Expected connected account {expected_sender}, dApp shows {observed!r}."
        )
    logger.info("Connected wallet with %s", expected_sender)
    return StageResult.passed(stage_name)


async def send_transaction_and_verify(context: StageContext) -> StageResult:
    logger.info("Sending an EIP-1559 transaction and verify success...")
    watcher = TransactionConfirmationWatcher(
        context.require_session(),
        context.require_wallet(),
        dapp_url=context.config.dapp_url,
        timeouts=context.settings.timeouts,
    )
    receipt = await watcher.submit_and_verify(
        TransferRequest(
            recipient=context.config.expected_recipient,
            amount=context.settings.transfer.amount,
            transaction_type=context.settings.transfer.transaction_type,
        )
    )
    if not receipt.succeeded:
        return StageResult.failed(
            SEND_STAGE_NAME,
            f"Transaction {receipt.transaction_hash} has status {receipt.status}, "
            f"expected {RECEIPT_SUCCESS_STATUS}.",
        )
    context.outcome.record_success()
    logger.info("Sent an EIP-1559 transaction and verified success")
    return StageResult.passed(SEND_STAGE_NAME)
