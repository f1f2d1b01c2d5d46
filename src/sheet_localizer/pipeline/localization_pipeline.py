# SPDX-License-Identifier: Apache-2.0
"""Localization service: load tables, localize sections, generate languages."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from sheet_localizer.core.applier import LocalizeOptions, localize_section
from sheet_localizer.core.csv_parser import parse_csv
from sheet_localizer.core.models import Node, Section, SectionResult
from sheet_localizer.core.section_matcher import (
    classify,
    find_sections,
    sections_from_selection,
)
from sheet_localizer.core.store import LocalizationStore, TaskLease
from sheet_localizer.core.table import LocalizationTable
from sheet_localizer.core.text_fit import TextFitEngine
from sheet_localizer.errors import LocalizationError, NoDataError
from sheet_localizer.host.base import DocumentHost
from sheet_localizer.pipeline.notifications import (
    CsvLoaded,
    ErrorNotice,
    GenerationComplete,
    LoadingChanged,
    LocalizationComplete,
    Notification,
    NotificationSink,
    SectionReport,
)
from sheet_localizer.sources.fetcher import CsvFetcher, SheetsApiClient

logger = logging.getLogger(__name__)

_N = TypeVar("_N", bound=Notification)


class LoadStatus(str, Enum):
    """Outcome of a load request."""

    LOADED = "loaded"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass
class LoadResult:
    """Result of a load request."""

    status: LoadStatus
    languages: list[str] = field(default_factory=list)
    key_count: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        """Whether a new table was loaded."""
        return self.status == LoadStatus.LOADED


@dataclass
class GenerateConfig:
    """Layout and localization settings for generated language sections."""

    spacing: float = 50.0
    viewport_margin: float = 200.0
    min_font_size: float = 10.0


class LocalizationService:
    """Coordinates loading, section discovery and localization."""

    def __init__(
        self,
        host: DocumentHost,
        store: LocalizationStore | None = None,
        notification_sink: NotificationSink | None = None,
        fetcher: CsvFetcher | None = None,
        sheets_client: SheetsApiClient | None = None,
        fit_engine: TextFitEngine | None = None,
    ) -> None:
        """Initialize LocalizationService."""
        self._host = host
        self._store = store or LocalizationStore()
        self._sink = notification_sink
        self._fetcher = fetcher
        self._sheets_client = sheets_client
        self._fit_engine = fit_engine or TextFitEngine(host)
        self._load_lease = TaskLease("load")

    @property
    def store(self) -> LocalizationStore:
        """Store holding the current table."""
        return self._store

    @property
    def is_loading(self) -> bool:
        """Whether a load is in flight."""
        return self._load_lease.held

    async def load_csv_text(self, csv_content: str) -> LoadResult:
        """Parse CSV text and make it the current table."""

        async def source() -> str:
            return csv_content

        return await self._load(source)

    async def load_csv_url(self, url: str) -> LoadResult:
        """Fetch CSV from ``url`` and make it the current table."""
        fetcher = self._fetcher or CsvFetcher()

        async def source() -> str:
            try:
                return await fetcher.fetch_text(url)
            finally:
                if self._fetcher is None:
                    await fetcher.close()

        return await self._load(source)

    async def load_sheets_api(self, sheet_id: str, api_key: str) -> LoadResult:
        """Read a sheet through the Sheets API and make it the current table."""
        client = self._sheets_client or SheetsApiClient()

        async def source() -> str:
            try:
                return await client.fetch_csv(sheet_id, api_key)
            finally:
                if self._sheets_client is None:
                    await client.close()

        return await self._load(source)

    async def localize_all(self, options: LocalizeOptions | None = None) -> LocalizationComplete:
        """Localize every language section on the page.

        Raises:
            LocalizationError: If the batch fails as a whole.
        """
        try:
            table = self._require_table()
            sections = find_sections(self._host.page, table.languages)
            if not sections:
                return self._emit(
                    LocalizationComplete(message="No language sections found on the page")
                )
            reports = await self._localize_sections(sections, table, options)
            return self._emit(
                LocalizationComplete(
                    message="Localization completed for all sections",
                    sections=reports,
                )
            )
        except Exception as exc:
            raise self._fail("localize", exc) from exc

    async def localize_selected(
        self, options: LocalizeOptions | None = None
    ) -> LocalizationComplete:
        """Localize the selected nodes that name a language.

        Raises:
            LocalizationError: If the batch fails as a whole.
        """
        try:
            table = self._require_table()
            selection = self._host.selection
            if not selection:
                return self._emit(LocalizationComplete(message="No sections selected"))

            sections = sections_from_selection(selection, table.languages)
            if not sections:
                return self._emit(
                    LocalizationComplete(
                        message="No valid language sections found in selection"
                    )
                )
            reports = await self._localize_sections(sections, table, options)
            return self._emit(
                LocalizationComplete(
                    message="Localization completed for selected sections",
                    sections=reports,
                )
            )
        except Exception as exc:
            raise self._fail("localize", exc) from exc

    async def generate_all_languages(
        self, config: GenerateConfig | None = None
    ) -> GenerationComplete:
        """Clone the selected master section once per other language.

        Raises:
            LocalizationError: If generation fails after it started.
        """
        config = config or GenerateConfig()
        try:
            table = self._require_table(
                "No localization data loaded. Please load CSV first.", stage="generate"
            )
            refusal = self._check_master(table)
            if isinstance(refusal, GenerationComplete):
                return self._emit(refusal)
            master, master_language = refusal

            targets = [lang for lang in table.languages if lang != master_language]
            if not targets:
                return self._emit(
                    GenerationComplete(success=False, error="No additional languages to generate")
                )

            reports, clones, generated = await self._generate(master, targets, table, config)

            self._host.select(clones)
            if clones:
                self._host.scroll_into_view([master, *clones])

            return self._emit(
                GenerationComplete(
                    success=True,
                    message="Language sections generated and localized successfully",
                    master_language=master_language,
                    generated_languages=generated,
                    sections=reports,
                )
            )
        except Exception as exc:
            raise self._fail("generate", exc) from exc

    async def _load(self, source: Callable[[], Awaitable[str]]) -> LoadResult:
        if not self._load_lease.try_acquire():
            logger.info("Load already in progress; request rejected")
            return LoadResult(status=LoadStatus.REJECTED, error="A load is already in progress")

        self._emit(LoadingChanged(is_loading=True))
        try:
            csv_content = await source()
            table = parse_csv(csv_content)
        except Exception as exc:
            logger.warning("Load failed at %s: %s", getattr(exc, "stage", "load"), exc)
            self._emit(CsvLoaded(success=False, error=str(exc)))
            return LoadResult(status=LoadStatus.FAILED, error=str(exc))
        else:
            self._store.replace(table)
            languages = list(table.languages)
            self._emit(
                CsvLoaded(success=True, languages=languages, key_count=table.key_count)
            )
            return LoadResult(
                status=LoadStatus.LOADED,
                languages=languages,
                key_count=table.key_count,
            )
        finally:
            self._load_lease.release()
            self._emit(LoadingChanged(is_loading=False))

    async def _localize_sections(
        self,
        sections: list[Section],
        table: LocalizationTable,
        options: LocalizeOptions | None,
    ) -> list[SectionReport]:
        reports: list[SectionReport] = []
        for section in sections:
            result = await localize_section(
                section,
                table,
                self._host,
                options,
                fit_engine=self._fit_engine,
            )
            reports.append(SectionReport(name=section.name, language=section.language, result=result))
        return reports

    def _check_master(
        self, table: LocalizationTable
    ) -> GenerationComplete | tuple[Node, str]:
        selection = self._host.selection
        if len(selection) != 1:
            return GenerationComplete(
                success=False,
                error="Please select exactly one section to use as master template",
            )

        master = selection[0]
        language = classify(master.name, table.languages)
        if language is None:
            return GenerationComplete(
                success=False,
                error=(
                    f'Selected section "{master.name}" doesn\'t match any language '
                    f"in CSV data. Available languages: {', '.join(table.languages)}"
                ),
            )
        return master, language

    async def _generate(
        self,
        master: Node,
        targets: list[str],
        table: LocalizationTable,
        config: GenerateConfig,
    ) -> tuple[list[SectionReport], list[Node], list[str]]:
        """Clone, place and localize one section per target language.

        A language whose clone cannot be created or placed is reported with a
        warning and skipped; the remaining languages are still generated.
        """
        host = self._host
        master_width = master.width or 0.0
        master_height = master.height or 0.0
        max_x = host.viewport_width - config.viewport_margin
        current_x = master.x + master_width + config.spacing
        current_y = master.y
        parent = master.parent if master.parent is not None else host.page

        options = LocalizeOptions(autosize_enabled=False, min_font_size=config.min_font_size)
        reports: list[SectionReport] = []
        clones: list[Node] = []
        generated: list[str] = []

        for language in targets:
            try:
                clone = host.clone(master)
                host.move(clone, current_x, current_y)
                host.rename(clone, language)
                host.append_child(parent, clone)
            except Exception as exc:
                logger.warning("Failed to generate '%s' section: %s", language, exc)
                reports.append(
                    SectionReport(
                        name=language,
                        language=language,
                        result=SectionResult(
                            warnings=[f"Failed to generate section for '{language}': {exc}"]
                        ),
                    )
                )
                continue

            section = Section(root=clone, language=language, name=clone.name)
            result = await localize_section(section, table, host, options)
            reports.append(SectionReport(name=clone.name, language=language, result=result))
            clones.append(clone)
            generated.append(language)

            current_x += (clone.width or 0.0) + config.spacing
            if current_x > max_x:
                current_x = master.x
                current_y += master_height + config.spacing

        logger.info("Generated %d language section(s) from '%s'", len(clones), master.name)
        return reports, clones, generated

    def _require_table(
        self,
        message: str = "No localization data loaded",
        stage: str = "localize",
    ) -> LocalizationTable:
        table = self._store.snapshot()
        if table is None:
            raise NoDataError(message, stage=stage)
        return table

    def _fail(self, stage: str, exc: Exception) -> LocalizationError:
        logger.error("%s failed: %s", stage.capitalize(), exc)
        self._emit(ErrorNotice(message=str(exc), stage=stage))
        return LocalizationError(str(exc), stage=stage, cause=exc)

    def _emit(self, notification: _N) -> _N:
        if self._sink is not None:
            self._sink(notification)
        return notification
