import dacite.exceptions
import pytest

import postprocess.config as pc
from _test_utils import write_file


def test_defaults(tmp_path):
    cfg = pc.load_cfg(root_dir=str(tmp_path))

    assert cfg == pc.PostprocessCfg(root_dir=str(tmp_path))
    assert cfg.changelog_path == 'CHANGELOG.md'
    assert cfg.anchor == '# Change Log'
    assert cfg.tag_prefix == 'draft/'
    assert cfg.stages == pc.StagesCfg()
    assert cfg.stages.update_changelog
    assert not any((
        cfg.stages.update_manifest,
        cfg.stages.commit_changes,
        cfg.stages.push_changes,
        cfg.stages.create_tag,
        cfg.stages.push_tags,
    ))


def test_load_default_cfg_file(tmp_path):
    write_file(tmp_path / pc.DEFAULT_CFG_FILE_NAME, '''\
changelog_path: docs/CHANGELOG.md
tag_prefix: rel/
stages:
  update_manifest: true
  create_tag: true
''')

    cfg = pc.load_cfg(root_dir=str(tmp_path))

    assert cfg.root_dir == str(tmp_path)
    assert cfg.changelog_path == 'docs/CHANGELOG.md'
    assert cfg.tag_prefix == 'rel/'
    assert cfg.stages == pc.StagesCfg(update_manifest=True, create_tag=True)
    assert cfg.path(cfg.changelog_path) == str(tmp_path / 'docs' / 'CHANGELOG.md')


def test_load_explicit_cfg_file(tmp_path):
    cfg_path = tmp_path / 'custom.yaml'
    write_file(cfg_path, 'head: main\n')

    cfg = pc.load_cfg(root_dir='/some/repo', cfg_path=str(cfg_path))

    assert cfg.head == 'main'
    assert cfg.root_dir == '/some/repo'


def test_load_git_user(tmp_path):
    write_file(tmp_path / pc.DEFAULT_CFG_FILE_NAME, '''\
git_user_name: Release Bot
git_user_email: release-bot@example.com
''')

    cfg = pc.load_cfg(root_dir=str(tmp_path))

    assert cfg.git_user_name == 'Release Bot'
    assert cfg.git_user_email == 'release-bot@example.com'
    assert pc.PostprocessCfg().git_user_name is None


def test_load_empty_cfg_file(tmp_path):
    write_file(tmp_path / pc.DEFAULT_CFG_FILE_NAME, '')

    assert pc.load_cfg(root_dir=str(tmp_path)) == pc.PostprocessCfg(root_dir=str(tmp_path))


def test_load_invalid_cfg_file(tmp_path):
    write_file(tmp_path / pc.DEFAULT_CFG_FILE_NAME, '- not a mapping\n')
    with pytest.raises(ValueError):
        pc.load_cfg(root_dir=str(tmp_path))

    write_file(tmp_path / pc.DEFAULT_CFG_FILE_NAME, 'unknown_attr: 42\n')
    with pytest.raises(dacite.exceptions.UnexpectedDataError):
        pc.load_cfg(root_dir=str(tmp_path))

    write_file(tmp_path / pc.DEFAULT_CFG_FILE_NAME, 'sign_commits: not-a-bool\n')
    with pytest.raises(dacite.exceptions.WrongTypeError):
        pc.load_cfg(root_dir=str(tmp_path))


def test_with_stages():
    cfg = pc.PostprocessCfg()

    updated = pc.with_stages(
        cfg,
        enabled=('commit-changes', 'push_tags'),
        disabled=('update-changelog', 'push-tags'),
    )

    assert updated.stages == pc.StagesCfg(
        commit_changes=True,
        update_changelog=False,
        push_tags=False,
    )
    # original cfg is not altered
    assert cfg.stages == pc.StagesCfg()

    with pytest.raises(ValueError):
        pc.with_stages(cfg, enabled=('no-such-stage',))
