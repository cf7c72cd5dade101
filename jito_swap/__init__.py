"""
Jito Swap
=========
Jupiter-routed token swaps landed on Solana through Jito bundles.
"""

__version__ = "0.1.0"
