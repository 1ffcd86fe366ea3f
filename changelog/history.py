import logging
import typing

import gitutil

logger = logging.getLogger(__name__)


class HistoryFetcher(typing.Protocol):
    def fetch(self, baseline: str | None) -> tuple[str, ...]:
        '''
        returns one line per commit (its subject, prefixed w/ `- `) between `baseline`
        (exclusive) and the current head (inclusive), newest commit first. If baseline is None,
        the full history reachable from head is returned.
        '''
        ...


class GitHistoryFetcher:
    def __init__(
        self,
        git_helper: gitutil.GitHelper,
        head: str='HEAD',
    ):
        self.git_helper = git_helper
        self.head = head

    def fetch(self, baseline: str | None) -> tuple[str, ...]:
        lines = self.git_helper.log_subjects(
            since=baseline,
            until=self.head,
        )
        logger.info(f'found {len(lines)} commit(s) since {baseline or "initial commit"}')
        return lines
