"""
Human-readable markdown summary of a prepared genesis.
"""

from __future__ import annotations

from typing import List

from .pipeline import GenesisOutput


def summarize_genesis_md(output: GenesisOutput) -> List[str]:
    c = output.components
    denom = c.denom
    lines: List[str] = []

    lines.append("# Genesis Preparation Summary")
    lines.append("")
    lines.append(f"- Genesis time: `{output.airdrop.start_time.isoformat()}`")
    lines.append(f"- Denom: `{denom}`")
    lines.append("")

    lines.append("## Supply Components")
    for name, amount in c.as_dict().items():
        lines.append(f"- **{name}**: `{amount:,}` {denom}")
    lines.append(f"- **total supply**: `{output.supply.amount:,}` {denom}")
    lines.append("")

    vesting_count = sum(1 for a in output.accounts if a.is_vesting)
    lines.append("## Accounts")
    lines.append(f"- Balances: **{len(output.balances)}**")
    lines.append(f"- Genesis accounts: **{len(output.accounts)}**")
    lines.append(f"- Vesting accounts: **{vesting_count}**")
    lines.append(f"- Claim grants: **{len(output.claim_grants)}**")
    lines.append("")

    a = output.airdrop
    lines.append("## Airdrop")
    lines.append(f"- id: `{a.id}`")
    lines.append(f"- source: `{a.source_address}`")
    lines.append(f"- conditions: {', '.join(a.conditions) if a.conditions else '_none_'}")
    lines.append(f"- window: `{a.start_time.isoformat()}` → `{a.end_time.isoformat()}`")
    lines.append("")

    return lines
