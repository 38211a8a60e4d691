"""
Well-known Move event signatures, keyed by "module::StructName".

Framework (0x2 / 0x3) events plus DeFi events that show up often on mainnet.
"""

from __future__ import annotations

from types import MappingProxyType

EVENT_DESCRIPTIONS = MappingProxyType({
    # Sui framework
    "coin::MintEvent": "New coins got minted for a specific coin type (supply increased).",
    "coin::BurnEvent": "Coins were burned and removed from circulation.",
    "coin::TransferEvent": "Generic coin handoff between owners.",
    "coin::BalanceChangeEvent": "Balance delta emitted for bookkeeping (used by wallets/indexers).",
    "pay::PayEvent": "Multi-recipient coin transfer that spent a coin vector.",
    "pay::PaySuiEvent": "Batch payout using pure SUI coins.",
    "pay::PayAllSuiEvent": "Sent the entire gas coin to one or more recipients.",
    "sui::NewEpochEvent": "Network advanced to a new epoch; validator set or parameters may have changed.",
    "sui::EndOfEpochEvent": "Epoch wrapped up and checkpoints/finalization were completed.",
    "sui::MoveCallMetricsEvent": "Diagnostic stats for a programmable transaction step.",
    "package::UpgradeEvent": "A Move package upgrade (new bytecode) landed on-chain.",
    "package::PublisherEvent": "A new package got published with the referenced upgrade capability.",
    "validator::AddStakeEvent": "Validator staking pool accepted additional delegated stake.",
    "validator::WithdrawStakeEvent": "Delegated stake (principal or rewards) was withdrawn from a validator.",
    "staking_pool::BalanceConvertedEvent": "Rewards inside a staking pool were converted to balance units.",
    "staking_pool::JoinEvent": "A participant joined a staking pool with fresh stake.",
    "staking_pool::LeaveEvent": "Stake exited the pool (either withdrawal or re-delegation).",
    # DeFi / application events
    "events::AssetSwap": (
        "Indicates a swap between two assets inside the referenced pool, "
        "usually logging the amounts in/out."
    ),
    "campaign::LoginEvent": "Fired when a campaign participant signs in, recording the actor and context.",
    "clob_v2::OrderFillEvent": "Central limit order book fill: maker/taker amounts are logged.",
    "farm::HarvestEvent": "Yield-farming reward distribution to the farmer wallet.",
    "vault::DepositEvent": "Assets were deposited into a vault strategy.",
    "vault::WithdrawEvent": "Assets withdrawn from a vault back to the user.",
})
