"""
Jito Swap CLI
=============
Command-line interface using Typer + Rich.

Commands:
    jito-swap swap --amount 0.01
    jito-swap swap --input-mint <MINT> --output-mint <MINT> --amount 5 --slippage 50
    jito-swap fee
"""

import asyncio
import json
import sys

import httpx
import typer
from rich.console import Console
from rich.panel import Panel

from config.settings import Settings
from jito_swap.execution.swap_orchestrator import SwapConfig, SwapOrchestrator
from jito_swap.execution.wallet import WalletManager
from jito_swap.shared.config.infrastructure import InfrastructureConfig
from jito_swap.shared.execution.execution_result import (
    SwapError, SwapFailedError, ValidationError,
)
from jito_swap.shared.execution.priority_fee import PriorityFeeEstimator
from jito_swap.shared.execution.schemas import SwapRequest
from jito_swap.shared.infrastructure.jito_adapter import JitoAdapter
from jito_swap.shared.infrastructure.jupiter_client import JupiterClient
from jito_swap.shared.infrastructure.ledger_client import LedgerClient

app = typer.Typer(
    name="jito-swap",
    help="Jupiter swaps landed through Jito bundles",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

EXIT_FAILED = 1
EXIT_NOT_POSSIBLE = 2


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: SWAP
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def swap(
    input_mint: str = typer.Option(Settings.WSOL_MINT, "--input-mint", "-i", help="Mint to sell"),
    output_mint: str = typer.Option(Settings.USDC_MINT, "--output-mint", "-o", help="Mint to buy"),
    amount: float = typer.Option(..., "--amount", "-a", help="Amount to sell, in human units"),
    slippage: float = typer.Option(Settings.DEFAULT_SLIPPAGE_BPS, "--slippage", "-s", help="Initial slippage in bps"),
    retries: int = typer.Option(Settings.DEFAULT_MAX_RETRIES, "--retries", "-r", help="Maximum swap attempts"),
):
    """
    Execute a swap and wait for its bundle to land.

    Slippage widens by half the initial value on every retry.

    \b
    Examples:
        jito-swap swap --amount 0.01
        jito-swap swap -a 25 -i EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v -o So11111111111111111111111111111111111111112
    """
    request = SwapRequest(
        input_mint=input_mint,
        output_mint=output_mint,
        amount=amount,
        slippage_bps=slippage,
        max_retries=retries,
    )

    console.print("\n")
    console.print(Panel.fit(
        f"[bold cyan]Swap[/bold cyan]\n\n"
        f"Input:    [white]{amount} of {input_mint}[/white]\n"
        f"Output:   [white]{output_mint}[/white]\n"
        f"Slippage: [white]{slippage / 100}%[/white] (max {retries} attempts)",
        border_style="cyan",
    ))

    try:
        result = asyncio.run(_run_swap(request))
    except ValidationError as e:
        console.print(f"[bold red]❌ Invalid {e.field}: {e.message}[/bold red]")
        raise typer.Exit(EXIT_FAILED)
    except SwapFailedError as e:
        console.print(f"[bold red]💔 {e.message}[/bold red]")
        raise typer.Exit(EXIT_FAILED)
    except SwapError as e:
        console.print(f"[bold red]❌ {e.code.value}: {e.message}[/bold red]")
        raise typer.Exit(EXIT_FAILED)

    if result is None:
        console.print("\n[yellow]💔 Swap could not be completed (insufficient funds for rent).[/yellow]")
        raise typer.Exit(EXIT_NOT_POSSIBLE)

    console.print(Panel.fit(
        f"[bold green]🎉 Swap completed[/bold green]\n\n"
        f"{json.dumps(result.bundle_status.to_dict(), indent=2)}\n\n"
        f"Signature: [white]{result.signature}[/white]\n"
        f"Solscan:   [link={result.explorer_url}]{result.explorer_url}[/link]",
        border_style="green",
    ))


async def _run_swap(request: SwapRequest):
    infra = InfrastructureConfig()
    wallet = WalletManager(infra.wallet_private_key)

    async with httpx.AsyncClient(timeout=infra.http_timeout_sec) as http:
        ledger = LedgerClient(http, infra.rpc_url)
        try:
            orchestrator = SwapOrchestrator(
                jupiter=JupiterClient(http, ledger, infra.jupiter_api_url),
                ledger=ledger,
                jito=JitoAdapter(http, region=infra.jito_region, bundle_url=infra.jito_bundle_url or None),
                wallet=wallet,
                config=SwapConfig(),
            )
            return await orchestrator.execute_swap(request)
        finally:
            await ledger.close()


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: FEE
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def fee():
    """
    Show the current priority fee estimate.
    """
    try:
        estimate = asyncio.run(_run_fee())
    except SwapError as e:
        console.print(f"[bold red]❌ {e.code.value}: {e.message}[/bold red]")
        raise typer.Exit(EXIT_FAILED)

    console.print(
        f"💸 Priority fee: [green]{estimate.micro_lamports}[/green] microLamports "
        f"([dim]{estimate.sol_amount:.9f} SOL[/dim])"
    )


async def _run_fee():
    infra = InfrastructureConfig()
    async with httpx.AsyncClient(timeout=infra.http_timeout_sec) as http:
        ledger = LedgerClient(http, infra.rpc_url)
        try:
            return await PriorityFeeEstimator(ledger).estimate()
        finally:
            await ledger.close()


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════════

def main():
    """Entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
