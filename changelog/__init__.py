'''
Changelog Generator

Derives a new section for a plugin's changelog (`CHANGELOG.md`) from git history, and inserts it
right below the changelog's anchor line (`# Change Log`).

The section lists the subjects of all commits since the latest release tag (tags are named
`draft/<version>`; the greatest version according to semver wins). If there is no release tag
yet, the whole history is included. References to issues or pull requests (`#123`) are rewritten
into links to the plugin's issue tracker.

Existing sections are never changed. If there is no changelog, nothing is done.
'''
