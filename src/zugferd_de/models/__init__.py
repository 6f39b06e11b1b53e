"""Pydantic-Datenmodelle für die E-Rechnung."""

from zugferd_de.models.invoice import Invoice, LineItem
from zugferd_de.models.party import Address, Contact, Customer, Seller
from zugferd_de.models.payment import BankDetails

__all__ = [
    "Address",
    "BankDetails",
    "Contact",
    "Customer",
    "Invoice",
    "LineItem",
    "Seller",
]
