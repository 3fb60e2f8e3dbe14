"""
KYB - Company validation service.

Validates a company against the chamber of commerce, the bank's restriction
list, the credit bureau and the regulator, and aggregates the answers.
"""

__version__ = "0.1.0"
