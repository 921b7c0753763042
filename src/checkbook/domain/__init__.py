"""Domain layer for checkbook application.

Services are imported from their modules (e.g.
``checkbook.domain.csv_import.CSVImportService``); this package does not
re-export them so the database layer can import ``checkbook.domain.entities``
without pulling in the services.
"""
