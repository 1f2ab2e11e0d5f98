"""
ledger_ingestion -- ContPAQ ledger workbook import.

Classifies each sheet row as an account header, a segment header or a
dated movement, carries the active account and segment forward, and
writes through the ledger_kernel stores.

Architecture:
    ledger_ingestion/ is a top-level package.  Nothing in ledger_kernel
    imports from ingestion.
"""
