"""
Jito Swap - CLI Entrypoint
==========================

    python main.py swap --amount 0.01
    python main.py fee
"""

import asyncio
import sys

from jito_swap.cli import main


if __name__ == "__main__":
    # Windows async event loop fix
    if sys.platform == 'win32':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    main()
