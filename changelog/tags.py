import logging
import typing

import semver

import changelog.model as cm
import version

logger = logging.getLogger(__name__)

DEFAULT_TAG_PREFIX = 'draft/'


class TagSource(typing.Protocol):
    def tag_names(self) -> typing.Iterable[str]:
        ...


def to_release_marker(tag: str, prefix: str=DEFAULT_TAG_PREFIX) -> cm.ReleaseMarker | None:
    '''
    returns a ReleaseMarker for the given tag, or None if the tag does not bear the given prefix,
    or if the remainder is not a (relaxed) semver version
    '''
    if not tag.startswith(prefix):
        return None

    parsed = version.parse_to_semver(
        tag.removeprefix(prefix),
        invalid_semver_ok=True,
    )
    if not parsed:
        logger.debug(f'ignoring {tag=}, as it is not a valid semver version')
        return None

    return cm.ReleaseMarker(
        tag=tag,
        prefix=prefix,
        version=parsed,
    )


class TagRepository:
    def __init__(
        self,
        source: TagSource,
        prefix: str=DEFAULT_TAG_PREFIX,
    ):
        if not prefix:
            raise ValueError('prefix must not be empty')
        self.source = source
        self.prefix = prefix

    def list_markers(self) -> tuple[cm.ReleaseMarker, ...]:
        '''
        returns release-markers for all tags w/ our prefix, greatest version first. Tags w/o
        prefix, or w/ invalid versions are silently omitted.
        '''
        markers = (
            to_release_marker(tag=tag, prefix=self.prefix)
            for tag in self.source.tag_names()
        )

        return tuple(version.sort_versions(
            versions=(marker for marker in markers if marker),
            converter=lambda marker: marker.version,
            descending=True,
        ))

    def latest_prior(self) -> cm.ReleaseMarker | None:
        '''
        returns the release-marker w/ the greatest version, or None if there was no release yet
        '''
        if not (markers := self.list_markers()):
            logger.info(f'no release-tags found ({self.prefix=})')
            return None

        latest = markers[0]
        logger.info(f'latest release-tag: {latest.tag}')
        return latest

    def latest_prior_version(self) -> semver.VersionInfo | None:
        if not (marker := self.latest_prior()):
            return None
        return marker.version
