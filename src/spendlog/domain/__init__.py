"""Domain layer for spendlog application.

Services are imported from their modules (``spendlog.domain.expense``,
``spendlog.domain.rates``) so the database layer can import entities from
here without a cycle.
"""
