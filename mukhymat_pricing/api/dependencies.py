"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from mukhymat_pricing.infrastructure.clients.ledger import LedgerClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_ledger_client() -> LedgerClient:
    """Provide payout ledger webhook client instance"""
    return LedgerClient()
