import dataclasses

import semver


@dataclasses.dataclass(frozen=True)
class ReleaseMarker:
    '''
    a git-tag marking a release, e.g. `draft/1.2.0`
    '''
    tag: str
    prefix: str
    version: semver.VersionInfo

    def __str__(self):
        return self.tag


@dataclasses.dataclass(frozen=True)
class IssueMatch:
    '''
    a reference to an issue or pull request within a line of text. `start` and `end` denote the
    matched span (as in `re.Match.span`); `number` is the referenced ticket's number.
    '''
    start: int
    end: int
    number: str


@dataclasses.dataclass(frozen=True)
class ChangelogSection:
    version: str
    lines: tuple[str, ...] = ()

    @property
    def header(self) -> str:
        return f'## v{self.version}'

    def render_lines(self) -> list[str]:
        return ['', self.header, '', *self.lines]


@dataclasses.dataclass(frozen=True)
class ChangelogDocument:
    path: str
    lines: tuple[str, ...]
