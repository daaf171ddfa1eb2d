#!/usr/bin/env python3
"""
Transfer Ledger Entry Point

Starts the FastAPI server with settings from LEDGER_* environment variables.
"""

import sys

from transfer_ledger.api import run_server
from transfer_ledger.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("Starting Transfer Ledger...")
    print(f"API available at: http://localhost:{config.api_port}")
    print(f"Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server(
            host=config.api_host,
            port=config.api_port,
            reload=config.api_reload
        )
    except KeyboardInterrupt:
        print("\nShutting down Transfer Ledger...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
