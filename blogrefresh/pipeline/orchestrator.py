"""Pipeline orchestrator that rewrites and republishes original articles."""

import time
from typing import Callable, List, Optional

import pendulum
from rich.console import Console
from rich.markup import escape

from ..config import Config, PipelineConfig
from ..errors import BlogRefreshError, ConfigurationError, PublishError
from ..generation import RewriteEngine, SourceDocument, create_provider
from ..ingestion import ContentExtractor
from ..models import Article, Reference
from ..publishing import Publisher
from ..search import ReferenceSearch
from ..store import ArticleStoreClient, updated_original_ids
from .models import ArticleOutcome, RunState, RunSummary
from .similarity import word_overlap_ratio

console = Console()


class PipelineOrchestrator:
    """Fetch originals, gate them, rewrite with references and publish the result."""

    def __init__(
        self,
        store: ArticleStoreClient,
        search: ReferenceSearch,
        extractor: ContentExtractor,
        rewriter: RewriteEngine,
        publisher: Publisher,
        settings: Optional[PipelineConfig] = None,
        output: Optional[Console] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize pipeline orchestrator.

        Args:
            store: Article store client
            search: Reference search
            extractor: Content extractor for reference pages
            rewriter: Rewrite engine
            publisher: Publisher for derivative articles
            settings: Gating thresholds, pauses and mode flags
            output: Output console (defaults to the module console)
            sleep: Pause function (injected by tests)
        """
        self.store = store
        self.search = search
        self.extractor = extractor
        self.rewriter = rewriter
        self.publisher = publisher
        self.settings = settings or PipelineConfig()
        self.console = output or console
        self.sleep = sleep

    @classmethod
    def from_config(cls, config: Config, output: Optional[Console] = None) -> "PipelineOrchestrator":
        """
        Wire every component from configuration.

        Raises:
            ConfigurationError: Missing port, search key, LLM key or unsupported provider
        """
        settings = config.config
        store = ArticleStoreClient(config.require_api_base_url(), timeout=settings.store.timeout)
        return cls(
            store=store,
            search=ReferenceSearch(settings.search),
            extractor=ContentExtractor(settings.extractor),
            rewriter=RewriteEngine(create_provider(settings.llm), settings.pipeline.rewrite_format),
            publisher=Publisher(store),
            settings=settings.pipeline,
            output=output,
        )

    def _print(self, label: str, message: str, style: Optional[str] = None) -> None:
        text = f"[{label}] {message}"
        if style:
            self.console.print(f"[{style}]{escape(text)}[/{style}]")
        else:
            self.console.print(escape(text))

    def is_duplicate_topic(self, title: str, state: RunState) -> bool:
        """True when the title overlaps a title processed earlier in this run by at least the threshold."""
        return any(
            word_overlap_ratio(title, previous) >= self.settings.similarity_threshold
            for previous in state.processed_titles
        )

    def find_references(self, title: str, label: str) -> List[Reference]:
        """
        Collect unique references across the query variants.

        Search failures count as zero results for that variant.
        """
        wanted = self.settings.min_references
        seen = set()
        combined: List[Reference] = []

        for template in self.settings.query_templates:
            query = template.format(title=title)
            try:
                results = self.search.search(query)
            except (BlogRefreshError, ValueError) as e:
                self._print(label, f"Search failed for query: {query} - {e}", "yellow")
                results = []

            for ref in results:
                if not ref.url or ref.url in seen:
                    continue
                seen.add(ref.url)
                combined.append(ref)
                if len(combined) >= wanted:
                    return combined[:wanted]

            self.sleep(self.settings.query_pause)

        return combined

    def scrape_references(self, references: List[Reference], label: str) -> List[SourceDocument]:
        """Scrape reference pages to text, dropping the ones that fail."""
        documents: List[SourceDocument] = []
        for ref in references:
            try:
                text = self.extractor.scrape(ref.url, output="text")
            except (BlogRefreshError, ValueError) as e:
                self._print(label, f"Failed scraping ref: {ref.url} - {e}", "yellow")
                continue
            documents.append(SourceDocument(title=ref.title, content=text, url=ref.url))
            self._print(label, f"Scraped ref: {ref.url}", "dim")
        return documents

    def process_article(self, article: Article, state: RunState, label: str) -> ArticleOutcome:
        """
        Run one original through the gates, rewrite and publish.

        Raises on failures after the gates; the caller counts them.
        """
        if article.id in state.already_updated:
            self._print(label, "Skipping article because it is already updated", "yellow")
            return ArticleOutcome.SKIPPED

        if self.is_duplicate_topic(article.title, state):
            self._print(label, "Skipping article due to similar topic", "yellow")
            return ArticleOutcome.SKIPPED
        state.processed_titles.append(article.title)

        references = self.find_references(article.title, label)
        self._print(label, f"References found: {len(references)}")
        if len(references) < self.settings.min_references:
            self._print(label, "Skipping article due to insufficient references", "yellow")
            return ArticleOutcome.SKIPPED
        state.eligible += 1

        scraped = self.scrape_references(references, label)

        rewritten = self.rewriter.rewrite(
            SourceDocument(title=article.title, content=article.content),
            scraped,
        )
        self._print(label, f"Rewritten content length: {len(rewritten)}", "dim")

        result = self.publisher.publish(
            title=f"{article.title}{self.settings.updated_title_suffix}",
            content=rewritten,
            original_article_id=article.id,
            references=references,
        )
        if not result.ok:
            raise PublishError(result.error or "publish failed", result.status, result.data)

        state.already_updated.add(article.id)
        self._print(label, f"Published updated article (status {result.status})", "green")
        return ArticleOutcome.SUCCEEDED

    def run(self) -> RunSummary:
        """
        Run the pipeline over every original lacking a derivative.

        Returns:
            Run summary with processed/succeeded/failed counts

        Raises:
            ConfigurationError: Aborts the whole run
            TransportError: The article list could not be fetched
        """
        started = pendulum.now()
        start_time = time.time()
        self.console.print("[bold blue]Pipeline start[/bold blue]")

        originals = self.store.fetch_original_articles()
        self.console.print(f"Fetched {len(originals)} original articles")
        state = RunState(updated_original_ids(self.store.list_articles()))

        for article in originals:
            state.processed += 1
            label = f"{state.processed}/{len(originals)}"
            self.console.print()
            self._print(label, f"Processing: {article.id} - {article.title}")

            titles_before = len(state.processed_titles)
            try:
                outcome = self.process_article(article, state, label)
            except ConfigurationError:
                raise
            except Exception as e:
                outcome = ArticleOutcome.FAILED
                self._print(label, f"FAILED: {e}", "red")
            state.record(outcome)

            if len(state.processed_titles) == titles_before:
                # Gated before the reference search: move straight on
                continue

            if self.settings.process_only_one and state.eligible >= 1:
                self.console.print("[yellow]Single-article mode: stopping after first eligible article[/yellow]")
                break

            self.sleep(self.settings.article_pause)

        summary = RunSummary(
            processed=state.processed,
            succeeded=state.succeeded,
            failed=state.failed,
            skipped=state.skipped,
            started_at=started.to_iso8601_string(),
            finished_at=pendulum.now().to_iso8601_string(),
            duration=time.time() - start_time,
            llm_usage=self.rewriter.provider.get_usage_stats(),
        )
        self.console.print(
            f"\nPipeline done. processed={summary.processed} "
            f"succeeded={summary.succeeded} failed={summary.failed}"
        )
        return summary
