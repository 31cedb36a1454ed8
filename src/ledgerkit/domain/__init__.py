"""Domain layer for ledgerkit.

Services are imported from their modules (``ledgerkit.domain.journal`` and so
on); this package does not re-export them because the database layer imports
``ledgerkit.domain.entities`` while the services import the database layer.
"""
