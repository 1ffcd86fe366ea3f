import dataclasses
import enum
import logging

import changelog.document as cd
import changelog.history as ch
import changelog.model as cm
import changelog.references as cr
import changelog.tags as ct

logger = logging.getLogger(__name__)


class GeneratorState(enum.StrEnum):
    IDLE = 'idle'
    BASELINE_RESOLVED = 'baseline-resolved'
    HISTORY_FETCHED = 'history-fetched'
    REWRITE_COMPLETE = 'rewrite-complete'
    MERGED = 'merged'
    DONE = 'done'


@dataclasses.dataclass(frozen=True)
class GenerationResult:
    states: tuple[GeneratorState, ...]
    baseline: cm.ReleaseMarker | None = None
    section: cm.ChangelogSection | None = None
    skipped: bool = False

    @property
    def state(self) -> GeneratorState:
        return self.states[-1]


class ChangelogGenerator:
    '''
    creates a changelog-section for `version`, listing all commits since the latest release, and
    inserts it into the changelog at `changelog_path`.

    states are passed through in the order defined by `GeneratorState`; a missing changelog
    leads from IDLE directly to DONE.
    '''
    def __init__(
        self,
        tag_repository: ct.TagRepository,
        history_fetcher: ch.HistoryFetcher,
        changelog_path: str,
        version: str,
        rewriter: cr.ReferenceRewriter | None=None,
        anchor: str=cd.DEFAULT_ANCHOR,
        skip_existing_version: bool=False,
    ):
        self.tag_repository = tag_repository
        self.history_fetcher = history_fetcher
        self.changelog_path = changelog_path
        self.version = version
        self.rewriter = rewriter
        self.anchor = anchor
        self.skip_existing_version = skip_existing_version

    def run(self) -> GenerationResult:
        states = [GeneratorState.IDLE]

        def skip():
            states.append(GeneratorState.DONE)
            return GenerationResult(states=tuple(states), skipped=True)

        if (doc := cd.load(self.changelog_path)) is None:
            return skip()

        logger.info(f'[change-log] updating {self.changelog_path}')
        # fail early if changelog cannot be merged into
        cd.anchor_index(doc=doc, anchor=self.anchor)

        if self.skip_existing_version and cd.has_section(doc=doc, version=self.version):
            logger.info(f'[change-log] section for {self.version} already exists - skipping')
            return skip()

        baseline = self.tag_repository.latest_prior()
        states.append(GeneratorState.BASELINE_RESOLVED)

        lines = self.history_fetcher.fetch(baseline=baseline.tag if baseline else None)
        states.append(GeneratorState.HISTORY_FETCHED)

        if self.rewriter:
            lines = self.rewriter.rewrite_all(lines)
        else:
            logger.warning('no issue-tracker url known - will not rewrite references')
        states.append(GeneratorState.REWRITE_COMPLETE)

        section = cm.ChangelogSection(
            version=self.version,
            lines=tuple(lines),
        )
        doc = cd.insert_section(
            doc=doc,
            section=section,
            anchor=self.anchor,
        )
        states.append(GeneratorState.MERGED)

        cd.save(doc)
        states.append(GeneratorState.DONE)

        return GenerationResult(
            states=tuple(states),
            baseline=baseline,
            section=section,
        )
