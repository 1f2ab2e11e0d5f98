"""
Ledger Kernel

Persistence core for imported ContPAQ ledgers:
- Companies, accounting accounts, segments and movements
- Find-or-create stores used by the workbook importer
- Typed errors and structured JSON logging
"""

__version__ = "0.1.0"
