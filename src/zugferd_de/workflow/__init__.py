"""Anlage-Workflow mit kompensierendem Rollback und Rechnungsnummern."""

from zugferd_de.workflow.create_invoice import (
    CreatedInvoice,
    CreateInvoiceWorkflow,
    InvoiceRepository,
)
from zugferd_de.workflow.numbering import InvoiceNumberSequence, next_invoice_number
from zugferd_de.workflow.saga import Saga, SagaStep

__all__ = [
    "CreateInvoiceWorkflow",
    "CreatedInvoice",
    "InvoiceNumberSequence",
    "InvoiceRepository",
    "Saga",
    "SagaStep",
    "next_invoice_number",
]
