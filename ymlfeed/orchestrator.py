"""
Feed Orchestrator

Resolves the sources to build, then for each one, in order: reads its
tables, enriches the product rows, renders the YML catalog and writes it to
the output directory.

A failure in any source aborts the whole build; persisting a diagnostic
record is left to the caller.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Dict, List, Optional
from urllib.parse import quote

from .common.config_loader import FeedConfig
from .common.errors import NoSourcesError
from .extraction.enricher import ProductEnricher
from .models import BuildResult, SourceRef
from .sources.base import SourceCatalog, TableSource
from .yml.builder import YmlCatalogBuilder

logger = logging.getLogger(__name__)


class FeedOrchestrator:
    """
    Builds one YML feed per resolved source.

    Usage:
        orchestrator = FeedOrchestrator(config, table_source, enricher, source_catalog=source)
        results = orchestrator.build_all()
    """

    def __init__(
        self,
        config: FeedConfig,
        table_source: TableSource,
        enricher: ProductEnricher,
        source_catalog: Optional[SourceCatalog] = None,
        builder: Optional[YmlCatalogBuilder] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Build settings (output dir, source ids, base URL)
            table_source: Reader for source tables
            enricher: Row enricher (holds concurrency and timeout)
            source_catalog: Discovery used when config.source_ids is empty
            builder: Catalog renderer (default YmlCatalogBuilder())
        """
        self.config = config
        self.table_source = table_source
        self.enricher = enricher
        self.source_catalog = source_catalog
        self.builder = builder or YmlCatalogBuilder()

    def resolve_sources(self) -> List[SourceRef]:
        """
        Explicit source ids if configured, otherwise every discovered source.

        Explicit ids carry no display name; the shop name is used for the
        filename instead.
        """
        if self.config.source_ids:
            return [SourceRef(id=source_id) for source_id in self.config.source_ids]
        if self.source_catalog is None:
            return []
        return list(self.source_catalog.list())

    def build_all(self) -> List[BuildResult]:
        """
        Build feeds for all resolved sources, sequentially.

        Returns:
            One BuildResult per source, in resolution order

        Raises:
            NoSourcesError: If no source was configured or discovered
        """
        started = datetime.now()
        sources = self.resolve_sources()
        if not sources:
            raise NoSourcesError()

        logger.info("Building %d feed(s) into %s", len(sources), self.config.output_dir)

        results = []
        for i, source in enumerate(sources, 1):
            logger.info("[%d/%d] Source %s", i, len(sources), source.id)
            results.append(self.build_source(source))

        elapsed = (datetime.now() - started).total_seconds()
        logger.info("Build complete: %d feed(s) in %.1f seconds", len(results), elapsed)
        return results

    def build_source(self, source: SourceRef) -> BuildResult:
        """Read, enrich, render and write one source."""
        tables = self.table_source.read(source.id)

        offers = self.enricher.enrich(
            tables.products,
            tables.category_by_name,
            currency_id=tables.settings.currency_id,
        )
        content, filename = self.builder.render(
            tables.settings,
            tables.categories,
            offers,
            source_id=source.id,
            display_name=source.display_name,
        )

        path = self.write_feed(filename, content)
        logger.info("Wrote %s (%d offers)", path, len(offers))
        return BuildResult(source_id=source.id, filename=filename, url=self.download_url(filename, path))

    def write_feed(self, filename: str, content: bytes) -> str:
        """Write a feed into the output directory, replacing any previous file."""
        os.makedirs(self.config.output_dir, exist_ok=True)
        path = os.path.join(self.config.output_dir, filename)
        with open(path, "wb") as f:
            f.write(content)
        return path

    def download_url(self, filename: str, path: str) -> str:
        """Public URL when a base URL is configured, else the local path."""
        base_url = self.config.base_url
        if not base_url:
            return path
        if not base_url.endswith('/'):
            base_url += '/'
        return f"{base_url}{quote(filename)}"

    def describe(self) -> Dict[str, object]:
        """Config summary for diagnostics records."""
        return {
            "output_dir": self.config.output_dir,
            "source_ids": list(self.config.source_ids),
            "concurrency": self.enricher.concurrency,
            "timeout": self.enricher.timeout,
        }
