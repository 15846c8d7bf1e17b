"""
YML Product Feed Builder

Modules:
    models       - Data models (ShopSettings, Category, Offer, Catalog)
    common       - Shared utilities (config loader, logging, errors, row accessors)
    extraction   - Product page scraping, image selection and row enrichment
    yml          - YML catalog rendering
    sources      - Tabular source interfaces and the CSV workbook source
    orchestrator - Builds one feed per resolved source
    scheduling   - Scheduled build trigger installation
"""
