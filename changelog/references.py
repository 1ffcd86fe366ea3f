import logging
import re
import typing

import changelog.model as cm

logger = logging.getLogger(__name__)

# references to issues or pull requests, as understood by GitHub, e.g.:
# `#123`, `(#123)`, `fixes #123`, `owner/repo#123`
ISSUE_REFERENCE_PATTERN = re.compile(
    r'(?<![\w-])'
    r'(?:(?P<owner>\w[\w.-]*?)/(?P<repository>\w[\w.-]*))?'
    r'#(?P<number>[1-9]\d*)\b',
    re.IGNORECASE,
)

DEFAULT_LABEL = 'GH'


class IssueMatcher(typing.Protocol):
    def match(self, text: str) -> typing.Sequence[cm.IssueMatch]:
        '''
        returns all issue-references found in the given text, ordered by position. Matches must
        not overlap.
        '''
        ...


class RegexIssueMatcher:
    def __init__(
        self,
        pattern: re.Pattern | str=ISSUE_REFERENCE_PATTERN,
        number_group: str='number',
    ):
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        if number_group not in pattern.groupindex:
            raise ValueError(f'{pattern.pattern=} lacks group {number_group=}')

        self.pattern = pattern
        self.number_group = number_group

    def match(self, text: str) -> tuple[cm.IssueMatch, ...]:
        return tuple(
            cm.IssueMatch(
                start=match.start(),
                end=match.end(),
                number=match.group(self.number_group),
            )
            for match in self.pattern.finditer(text)
        )


default_matcher = RegexIssueMatcher()


def split_segments(
    text: str,
    matches: typing.Sequence[cm.IssueMatch],
) -> list[str | cm.IssueMatch]:
    '''
    splits the given text into alternating literal and match segments:
    [literal, match, literal, match, ..., literal]

    literals may be empty (e.g. if text starts w/ a match). Joining all literals and the matched
    spans of all matches yields the original text.
    '''
    segments = []
    pos = 0

    for match in matches:
        if match.start < pos or match.end > len(text) or match.start > match.end:
            raise ValueError(f'{match=} overlaps w/ preceding match or exceeds {text=}')
        segments.append(text[pos:match.start])
        segments.append(match)
        pos = match.end

    segments.append(text[pos:])
    return segments


class ReferenceRewriter:
    def __init__(
        self,
        link_base_url: str,
        matcher: IssueMatcher=None,
        label: str=DEFAULT_LABEL,
    ):
        if not link_base_url:
            raise ValueError('link_base_url must not be empty')

        self.link_base_url = link_base_url.rstrip('/')
        self.matcher = matcher or default_matcher
        self.label = label

    def link(self, number: str) -> str:
        return f'[{self.label}-{number}]({self.link_base_url}/{number})'

    def rewrite(self, line: str) -> str:
        if not (matches := self.matcher.match(line)):
            return line

        rewritten = ''.join(
            self.link(segment.number) if isinstance(segment, cm.IssueMatch) else segment
            for segment in split_segments(line, matches)
        )
        logger.debug(f'rewrote {len(matches)} reference(s): {rewritten}')
        return rewritten

    def rewrite_all(self, lines: typing.Iterable[str]) -> tuple[str, ...]:
        return tuple(self.rewrite(line) for line in lines)


def rewrite_references(
    line: str,
    link_base_url: str,
    matcher: IssueMatcher=None,
) -> str:
    return ReferenceRewriter(
        link_base_url=link_base_url,
        matcher=matcher,
    ).rewrite(line)
