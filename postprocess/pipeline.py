'''
post-processing pipeline, run after a plugin's version was bumped (in `package.json`).

The pipeline consists of a fixed sequence of stages, each of which may be enabled or disabled
through `StagesCfg`. Stages are executed strictly in order; any failure aborts the pipeline.
'''

import dataclasses
import enum
import logging
import typing

import changelog.generate
import changelog.history
import changelog.references
import changelog.tags
import gitutil
import manifest
import postprocess.config as pc
import version

logger = logging.getLogger(__name__)


class StageName(enum.StrEnum):
    UPDATE_MANIFEST = 'update-manifest'
    COMMIT_CHANGES = 'commit-changes'
    UPDATE_CHANGELOG = 'update-changelog'
    PUSH_CHANGES = 'push-changes'
    CREATE_TAG = 'create-tag'
    PUSH_TAGS = 'push-tags'

    @property
    def cfg_attr(self) -> str:
        return self.value.replace('-', '_')


@dataclasses.dataclass(frozen=True)
class ReleaseContext:
    cfg: pc.PostprocessCfg
    package_manifest: manifest.PackageManifest
    git_helper: gitutil.GitHelper

    @property
    def version(self) -> str:
        return self.package_manifest.version

    @property
    def is_release(self) -> bool:
        return not version.is_dev_version(self.version, dev_marker=self.cfg.dev_marker)

    @property
    def release_tag(self) -> str:
        return f'{self.cfg.tag_prefix}{self.version}'


def commit_message(ctx: ReleaseContext) -> str:
    if ctx.is_release:
        return f':bookmark: Release bump version: {ctx.version}'
    return f':gear: Bump dev version: {ctx.version}'


def update_manifest(ctx: ReleaseContext):
    manifest.update_plugin_xml(
        path=ctx.cfg.path(ctx.cfg.plugin_xml_path),
        version=ctx.version,
    )


def commit_changes(ctx: ReleaseContext):
    changed = ctx.git_helper.changed_file_paths()
    logger.info(f'[git] files to be committed: {changed}')
    ctx.git_helper.add_and_commit(message=commit_message(ctx))


def update_changelog(ctx: ReleaseContext) -> changelog.generate.GenerationResult:
    cfg = ctx.cfg

    if (issues_url := ctx.package_manifest.issues_url):
        rewriter = changelog.references.ReferenceRewriter(
            link_base_url=issues_url,
            label=cfg.issue_label,
        )
    else:
        rewriter = None

    generator = changelog.generate.ChangelogGenerator(
        tag_repository=changelog.tags.TagRepository(
            source=ctx.git_helper,
            prefix=cfg.tag_prefix,
        ),
        history_fetcher=changelog.history.GitHistoryFetcher(
            git_helper=ctx.git_helper,
            head=cfg.head,
        ),
        changelog_path=cfg.path(cfg.changelog_path),
        version=ctx.version,
        rewriter=rewriter,
        anchor=cfg.anchor,
        skip_existing_version=cfg.skip_existing_version,
    )

    return generator.run()


def push_changes(ctx: ReleaseContext):
    ctx.git_helper.push(from_ref=ctx.cfg.head, to_ref=ctx.cfg.branch)


def create_tag(ctx: ReleaseContext):
    if not ctx.is_release:
        logger.info(f'{ctx.version=} is a dev-version - will not create tag')
        return
    ctx.git_helper.create_tag(ctx.release_tag)


def push_tags(ctx: ReleaseContext):
    if not ctx.is_release:
        logger.info(f'{ctx.version=} is a dev-version - will not push tags')
        return
    ctx.git_helper.push_tags()


@dataclasses.dataclass(frozen=True)
class Stage:
    name: StageName
    run: typing.Callable[[ReleaseContext], typing.Any]

    def enabled(self, stages_cfg: pc.StagesCfg) -> bool:
        return getattr(stages_cfg, self.name.cfg_attr)


STAGES = (
    Stage(name=StageName.UPDATE_MANIFEST, run=update_manifest),
    Stage(name=StageName.COMMIT_CHANGES, run=commit_changes),
    Stage(name=StageName.UPDATE_CHANGELOG, run=update_changelog),
    Stage(name=StageName.PUSH_CHANGES, run=push_changes),
    Stage(name=StageName.CREATE_TAG, run=create_tag),
    Stage(name=StageName.PUSH_TAGS, run=push_tags),
)


def enabled_stages(
    stages_cfg: pc.StagesCfg,
    stages: typing.Sequence[Stage]=STAGES,
) -> tuple[Stage, ...]:
    return tuple(stage for stage in stages if stage.enabled(stages_cfg))


def release_context(cfg: pc.PostprocessCfg) -> ReleaseContext:
    return ReleaseContext(
        cfg=cfg,
        package_manifest=manifest.read_package_manifest(cfg.path(cfg.package_manifest_path)),
        git_helper=gitutil.GitHelper(
            repo=cfg.root_dir,
            git_cfg=gitutil.GitCfg(
                user_name=cfg.git_user_name,
                user_email=cfg.git_user_email,
                sign_commits=cfg.sign_commits,
                remote=cfg.remote,
            ),
        ),
    )


def run(
    cfg: pc.PostprocessCfg,
    stages: typing.Sequence[Stage]=STAGES,
) -> dict[StageName, typing.Any]:
    '''
    runs all enabled stages in order, returning their results (keyed by stage-name)
    '''
    ctx = release_context(cfg)
    logger.info(f'post-processing {ctx.package_manifest.name} {ctx.version}')

    results = {}
    for stage in enabled_stages(cfg.stages, stages=stages):
        logger.info(f'running stage {stage.name}')
        results[stage.name] = stage.run(ctx)

    return results
