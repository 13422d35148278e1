from pathlib import Path
from typing import Any, Mapping, Optional

from docport.common import bus
from docport.common.transaction import TransactionManager
from docport.config import (
    MergeConfiguration,
    build_configuration,
    load_config_from_path,
)
from docport.io import DocsLoader, DocsWriter, IntelliSenseLoader, SourceLoader
from docport.needle import L
from docport.spec import SignatureNormalizerProtocol
from .runners import PortRunner, UndocumentedReporter
from .services import (
    DirtyTracker,
    ExceptionMerger,
    FieldMerger,
    InterfaceRemarksResolver,
    Matcher,
    SignatureNormalizer,
)
from .types import PortResult, UndocReport


class DocsPorterApp:
    def __init__(
        self,
        root_path: Path,
        normalizer: Optional[SignatureNormalizerProtocol] = None,
        transaction: Optional[TransactionManager] = None,
    ):
        self.root_path = root_path
        self.normalizer = normalizer or SignatureNormalizer()
        self.tm = transaction or TransactionManager(root_path)

    def load_configuration(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        require_intellisense: bool = True,
    ) -> MergeConfiguration:
        """Merges ``[tool.docport]`` with command line overrides."""
        settings, base_path = load_config_from_path(self.root_path)
        merged = dict(settings)
        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value
        # Paths given on the command line are relative to where we run.
        for key in ("docs_dirs", "intellisense_dirs"):
            if (overrides or {}).get(key) is not None:
                merged[key] = _absolute(overrides[key], self.root_path)
        return build_configuration(merged, base_path, require_intellisense)

    def make_source_loader(self, config: MergeConfiguration) -> SourceLoader:
        return IntelliSenseLoader(config, self.normalizer)

    def run_port(self, config: MergeConfiguration) -> PortResult:
        bus.info(L.port.run.start)

        corpus = DocsLoader(self.normalizer).load(config.docs_dirs)
        bus.info(L.load.docs_done, count=len(corpus.documents))
        if not corpus.documents:
            bus.warning(L.load.docs_empty)

        entries = self.make_source_loader(config).load(config.intellisense_dirs)
        matcher = Matcher(config, self.normalizer)
        index = matcher.build_index(entries)
        bus.info(L.load.source_done, count=len(index))

        # Captured before any merge so results do not depend on type order.
        resolver = InterfaceRemarksResolver.snapshot(
            config, self.normalizer, corpus.types, index
        )
        tracker = DirtyTracker()
        runner = PortRunner(
            config,
            matcher,
            FieldMerger(config, resolver, tracker),
            ExceptionMerger(config, self.normalizer, tracker),
            tracker,
            DocsWriter(),
        )
        result = runner.run(corpus, index, self.tm)

        bus.info(
            L.port.run.summary,
            merged=result.merged_count,
            unchanged=result.nothing_to_merge_count,
            unmatched=result.unmatched_count,
        )
        if result.unmatched_member_count or result.orphan_count:
            bus.info(
                L.port.run.misses,
                members=result.unmatched_member_count,
                orphans=result.orphan_count,
            )

        if config.print_undoc:
            UndocumentedReporter(config).run(corpus.types)

        if not result.success:
            bus.error(L.port.run.failed, count=len(result.failures))
        elif config.save:
            bus.success(L.port.run.complete, count=len(result.written))
        return result

    def run_undoc(self, config: MergeConfiguration) -> UndocReport:
        corpus = DocsLoader(self.normalizer).load(config.docs_dirs)
        bus.info(L.load.docs_done, count=len(corpus.documents))
        return UndocumentedReporter(config).run(corpus.types)


def _absolute(value: Any, root: Path) -> Any:
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)):
        return [str((root / Path(v.strip()).expanduser())) for v in value if v.strip()]
    return value
