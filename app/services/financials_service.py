"""
Financials service for recurring obligations and expected income.

Mutations load the current document, build a replacement and save it; the
stored lists are never modified in place.
"""

import logging

from app.models.financials import FinancialData, IncomeEvent, RecurringObligation
from app.storage import JsonDocumentStore, StorageService

logger = logging.getLogger(__name__)

FINANCIALS_KEY = "financials/financials_v1.json"


class FinancialsService:
    """Add and remove obligations and income events."""

    def __init__(self, storage: StorageService):
        self.store: JsonDocumentStore[FinancialData] = JsonDocumentStore(
            storage, FINANCIALS_KEY, FinancialData, FinancialData
        )

    def get_financials(self) -> FinancialData:
        """Get the stored financial data (empty if none is stored)."""
        data = self.store.load()
        return data if data is not None else FinancialData()

    def add_obligation(self, obligation: RecurringObligation) -> FinancialData:
        data = self.get_financials().with_obligation(obligation)
        self.store.save(data)
        logger.info(f"Added obligation {obligation.id} ({obligation.name})")
        return data

    def remove_obligation(self, obligation_id: str) -> bool:
        """Remove an obligation; returns False if no obligation has that id."""
        current = self.get_financials()
        updated = current.without_obligation(obligation_id)
        if len(updated.obligations) == len(current.obligations):
            return False
        self.store.save(updated)
        logger.info(f"Removed obligation {obligation_id}")
        return True

    def add_income_event(self, income_event: IncomeEvent) -> FinancialData:
        data = self.get_financials().with_income_event(income_event)
        self.store.save(data)
        logger.info(f"Added income event {income_event.id} ({income_event.source})")
        return data

    def remove_income_event(self, income_event_id: str) -> bool:
        """Remove an income event; returns False if no event has that id."""
        current = self.get_financials()
        updated = current.without_income_event(income_event_id)
        if len(updated.income_events) == len(current.income_events):
            return False
        self.store.save(updated)
        logger.info(f"Removed income event {income_event_id}")
        return True
