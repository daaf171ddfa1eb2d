"""
Transfer Ledger API Application Factory
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging, get_logger
from .accounts import router as accounts_router
from .dependencies import LedgerSystem
from .errors import register_exception_handlers
from .transactions import router as transactions_router


def create_app(system: Optional[LedgerSystem] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        system: Ledger to serve; built from configuration when omitted
    """
    config = get_config()
    if system is None:
        setup_logging(config.log_level, config.log_format)
        system = LedgerSystem(seed_sample_data=config.seed_sample_data)

    app = FastAPI(
        title="Transfer Ledger API",
        description="In-memory ledger of accounts and money transfers",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger_system = system

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(transactions_router, prefix="/transactions", tags=["Transactions"])

    @app.get("/health", response_class=PlainTextResponse)
    async def health_check():
        """Health check endpoint"""
        return "OK"

    get_logger("transfer_ledger.api").info(
        "Ledger API ready with %d accounts and %d transactions",
        len(system.accounts), len(system.transactions)
    )
    return app


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = False):
    """Run the FastAPI server"""
    uvicorn.run(
        "transfer_ledger.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )
