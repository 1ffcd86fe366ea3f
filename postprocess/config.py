import dataclasses
import logging
import os

import dacite
import yaml

import changelog.document
import changelog.tags

logger = logging.getLogger(__name__)

DEFAULT_CFG_FILE_NAME = '.release-postprocess.yaml'


@dataclasses.dataclass(frozen=True)
class StagesCfg:
    '''
    toggles for the stages of the post-processing pipeline (in order of execution). By default,
    only the changelog is updated.
    '''
    update_manifest: bool = False
    commit_changes: bool = False
    update_changelog: bool = True
    push_changes: bool = False
    create_tag: bool = False
    push_tags: bool = False


@dataclasses.dataclass(frozen=True)
class PostprocessCfg:
    '''
    paths are interpreted relative to `root_dir`
    '''
    root_dir: str = '.'
    changelog_path: str = 'CHANGELOG.md'
    package_manifest_path: str = 'package.json'
    plugin_xml_path: str = 'plugin.xml'
    anchor: str = changelog.document.DEFAULT_ANCHOR
    tag_prefix: str = changelog.tags.DEFAULT_TAG_PREFIX
    head: str = 'HEAD'
    branch: str = 'master'
    remote: str = 'origin'
    sign_commits: bool = False
    # if set, overwrites author and committer of release-commits
    git_user_name: str | None = None
    git_user_email: str | None = None
    dev_marker: str = '-dev'
    issue_label: str = 'GH'
    skip_existing_version: bool = False
    stages: StagesCfg = dataclasses.field(default_factory=StagesCfg)

    def path(self, relpath: str) -> str:
        return os.path.join(self.root_dir, relpath)


def cfg_from_dict(raw: dict) -> PostprocessCfg:
    return dacite.from_dict(
        data_class=PostprocessCfg,
        data=raw or {},
        config=dacite.Config(
            cast=[tuple],
            strict=True,
        ),
    )


def load_cfg(
    root_dir: str='.',
    cfg_path: str=None,
) -> PostprocessCfg:
    '''
    loads configuration from the given YAML file. If no path is given, the default cfg-file in
    `root_dir` is read, if present; otherwise, defaults are returned.

    `root_dir` always takes precedence over a `root_dir` read from cfg-file.
    '''
    if not cfg_path:
        cfg_path = os.path.join(root_dir, DEFAULT_CFG_FILE_NAME)
        if not os.path.isfile(cfg_path):
            logger.debug(f'no cfg-file at {cfg_path=} - using defaults')
            return PostprocessCfg(root_dir=root_dir)

    logger.info(f'reading cfg from {cfg_path}')
    with open(cfg_path) as f:
        raw = yaml.safe_load(f)

    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f'{cfg_path=} must contain a mapping')

    return dataclasses.replace(
        cfg_from_dict(raw),
        root_dir=root_dir,
    )


def with_stages(
    cfg: PostprocessCfg,
    enabled: tuple[str, ...]=(),
    disabled: tuple[str, ...]=(),
) -> PostprocessCfg:
    '''
    returns a copy of the given cfg w/ the given stages (named as attributes of `StagesCfg`, or
    w/ dashes instead of underscores) enabled or disabled. Disabling has precedence.
    '''
    stage_names = {field.name for field in dataclasses.fields(StagesCfg)}

    def normalise(name: str) -> str:
        name = name.replace('-', '_')
        if name not in stage_names:
            raise ValueError(f'unknown stage {name=}, must be one of {sorted(stage_names)}')
        return name

    overrides = {normalise(name): True for name in enabled}
    overrides |= {normalise(name): False for name in disabled}

    return dataclasses.replace(
        cfg,
        stages=dataclasses.replace(cfg.stages, **overrides),
    )
