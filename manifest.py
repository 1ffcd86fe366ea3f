# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

'''
access to the plugin's manifests: `package.json` (npm package metadata, the source of truth for
the plugin's version and issue-tracker) and `plugin.xml` (plugin descriptor, whose version is
kept in sync w/ package.json)
'''

import dataclasses
import json
import logging
import os
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class PackageManifest:
    name: str | None
    version: str
    issues_url: str | None = None


def _issues_url(raw: dict) -> str | None:
    # npm allows `bugs` to be either a url, or an object w/ `url` and/or `email` attrs
    bugs = raw.get('bugs')
    if isinstance(bugs, str):
        return bugs
    if isinstance(bugs, dict):
        return bugs.get('url')
    return None


def read_package_manifest(path: str) -> PackageManifest:
    logger.info(f'[setup] loading {path}')
    if not os.path.isfile(path):
        raise ManifestError(f'missing package manifest: {path}')

    with open(path) as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ManifestError(f'{path} does not contain a JSON object')
    if not (version := raw.get('version')):
        raise ManifestError(f'{path} does not declare a version')

    return PackageManifest(
        name=raw.get('name'),
        version=str(version),
        issues_url=_issues_url(raw),
    )


def _register_namespaces(path: str):
    # ElementTree will otherwise emit generated prefixes (ns0, ns1, ..) upon serialisation
    for _, (prefix, uri) in ET.iterparse(path, events=('start-ns',)):
        ET.register_namespace(prefix, uri)


def update_plugin_xml(path: str, version: str):
    '''
    sets the `version` attribute of the root `plugin` element in the given plugin descriptor.
    Comments are retained; formatting within elements is retained as parsed.
    '''
    if not os.path.isfile(path):
        raise ManifestError(f'missing plugin descriptor: {path}')

    _register_namespaces(path)

    logger.info(f'[plugin.xml] updating version to: {version}')
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    tree = ET.parse(path, parser=parser)
    root = tree.getroot()

    # root tag may be namespace-qualified, e.g. `{http://apache.org/cordova/ns/plugins/1.0}plugin`
    if root.tag.rsplit('}', 1)[-1] != 'plugin':
        raise ManifestError(f'{path}: expected root element `plugin`, found {root.tag}')

    root.set('version', version)

    with open(path, 'wb') as f:
        tree.write(f, encoding='utf-8', xml_declaration=True)
        f.write(b'\n')
