# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import logging
import typing

import semver

logger = logging.getLogger(__name__)

Version = semver.VersionInfo | str

DEV_MARKER = '-dev'

T = typing.TypeVar('T')


def parse_to_semver(
    version,
    invalid_semver_ok: bool=False,
) -> semver.VersionInfo | None:
    '''
    parses the given version into a semver.VersionInfo object.

    Different from strict semver, the given version is preprocessed, if required, to
    convert the version into a valid semver version, if possible.

    The following preprocessings are done:

    - strip away `v` prefix
    - append patch-level `.0` for two-digit versions
    - rm leading zeroes

    @param version: either a str, or a semver.VersionInfo (returned as-is)
    @param invalid_semver_ok: if True, return None for unparsable versions instead of raising
    '''
    if isinstance(version, semver.VersionInfo):
        return version
    if version is None:
        raise ValueError('version must not be None')
    if not isinstance(version, str):
        logger.warning(f'unexpected type for version: {type(version)}')
        version = str(version)

    try:
        return _parse_relaxed(version)
    except ValueError:
        if invalid_semver_ok:
            return None
        raise


def _parse_relaxed(version: str) -> semver.VersionInfo:
    def raise_invalid():
        raise ValueError(f'not a valid (semver) version: `{version}`')

    if not version:
        raise_invalid()

    semver_version = version.removeprefix('v')

    try:
        return semver.VersionInfo.parse(semver_version)
    except ValueError:
        pass # try extending `.0` as patch-level

    if '-' in semver_version:
        sep = '-'
    else:
        sep = '+'

    numeric, sep, suffix = semver_version.partition(sep)
    if numeric.count('.') == 1:
        numeric += '.0'

    try:
        return semver.VersionInfo.parse(numeric + sep + suffix)
    except ValueError:
        pass # last try: strip leading zeroes

    try:
        major, minor, patch = numeric.split('.')
        numeric = '.'.join(str(int(part)) for part in (major, minor, patch))
    except ValueError:
        raise_invalid()

    try:
        return semver.VersionInfo.parse(numeric + sep + suffix)
    except ValueError:
        # re-raise with original version str
        raise_invalid()


def is_dev_version(version: str, dev_marker: str=DEV_MARKER) -> bool:
    '''
    development versions are marked by a (configurable) substring, e.g. `1.2.0-dev`. Such
    versions are committed, but never tagged as releases.
    '''
    return dev_marker in version


def sort_versions(
    versions: typing.Iterable[T],
    converter: typing.Callable[[T], Version]=None,
    descending: bool=False,
) -> list[T]:
    '''
    sorts the given versions by semver precedence. If `converter` is passed, it is used to
    obtain a version from each element (e.g. a tag-object). All versions must be parsable.

    the sort is stable: elements of equal precedence retain their relative order, which makes
    repeated sorting idempotent.
    '''
    def key(element):
        if converter:
            element = converter(element)
        return parse_to_semver(element)

    return sorted(versions, key=key, reverse=descending)
