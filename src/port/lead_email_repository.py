"""Port definition for LeadEmailRepository."""

from typing import Protocol

from domain.model.lead_email import LeadEmail


class LeadEmailRepository(Protocol):
    def save(self, lead: LeadEmail) -> bool: ...

    def find_by_product(self, product_id: str) -> list[LeadEmail]: ...
