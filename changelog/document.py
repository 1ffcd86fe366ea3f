import logging
import os
import tempfile

import changelog.model as cm

logger = logging.getLogger(__name__)

DEFAULT_ANCHOR = '# Change Log'


class MissingAnchorError(ValueError):
    pass


def load(path: str) -> cm.ChangelogDocument | None:
    '''
    reads the changelog from the given path. Returns None if there is no such file (which
    callers should treat as "nothing to do").
    '''
    if not os.path.isfile(path):
        logger.info(f'no changelog at {path=}')
        return None

    # only split on \n; other line-breaks (incl. \r of CRLF) are retained as line content
    with open(path, encoding='utf-8', newline='') as f:
        lines = f.read().split('\n')

    # trailing newline is re-added upon save
    if lines[-1] == '':
        lines.pop()

    return cm.ChangelogDocument(
        path=path,
        lines=tuple(lines),
    )


def anchor_index(
    doc: cm.ChangelogDocument,
    anchor: str=DEFAULT_ANCHOR,
) -> int:
    for idx, line in enumerate(doc.lines):
        if line.removesuffix('\r') == anchor:
            return idx

    raise MissingAnchorError(f'{doc.path} does not contain anchor line {anchor!r}')


def has_section(
    doc: cm.ChangelogDocument,
    version: str,
) -> bool:
    header = cm.ChangelogSection(version=version).header
    return any(line.removesuffix('\r') == header for line in doc.lines)


def insert_section(
    doc: cm.ChangelogDocument,
    section: cm.ChangelogSection,
    anchor: str=DEFAULT_ANCHOR,
) -> cm.ChangelogDocument:
    '''
    returns a new document w/ the given section inserted right after the (first) anchor line.
    All other lines are retained (lines after the anchor are shifted by the section's length).

    raises MissingAnchorError if the document does not contain the anchor line
    '''
    idx = anchor_index(doc=doc, anchor=anchor) + 1

    return cm.ChangelogDocument(
        path=doc.path,
        lines=(
            *doc.lines[:idx],
            *section.render_lines(),
            *doc.lines[idx:],
        ),
    )


def save(
    doc: cm.ChangelogDocument,
    path: str=None,
):
    '''
    writes the given document (to its origin path, unless `path` is passed), replacing the
    previous file contents. Contents are written to a temporary file first, which is then moved
    to the target path, so readers will never see a partially written changelog.
    '''
    path = path or doc.path
    contents = '\n'.join(doc.lines) + '\n'

    with tempfile.NamedTemporaryFile(
        mode='w',
        encoding='utf-8',
        newline='',
        dir=os.path.dirname(os.path.abspath(path)),
        prefix='.changelog-',
        delete=False,
    ) as f:
        f.write(contents)

    if os.path.exists(path):
        os.chmod(f.name, os.stat(path).st_mode & 0o777)
    os.replace(f.name, path)
    logger.info(f'wrote {len(doc.lines)} lines to {path}')
