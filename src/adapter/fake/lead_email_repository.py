"""In-memory implementation of LeadEmailRepository for testing."""

from domain.model.lead_email import LeadEmail


class FakeLeadEmailRepository:
    def __init__(self):
        self.store: list[LeadEmail] = []

    def save(self, lead: LeadEmail) -> bool:
        self.store.append(lead)
        return True

    def find_by_product(self, product_id: str) -> list[LeadEmail]:
        leads = [lead for lead in self.store if lead.product_id == product_id]
        return sorted(leads, key=lambda lead: lead.downloaded_at, reverse=True)
