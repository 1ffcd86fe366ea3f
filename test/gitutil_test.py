import os

import git
import git.exc
import pytest

import gitutil
from _test_utils import commit


@pytest.fixture
def git_helper(git_repo):
    return gitutil.GitHelper(
        repo=git_repo,
        git_cfg=gitutil.GitCfg(),
    )


def test_init_validation(git_repo):
    with pytest.raises(ValueError):
        gitutil.GitHelper(repo=None)

    with pytest.raises(ValueError):
        gitutil.GitHelper(repo=42)

    helper = gitutil.GitHelper(repo=git_repo.working_tree_dir)
    assert helper.repo.working_tree_dir == git_repo.working_tree_dir
    assert helper.git_cfg == gitutil.GitCfg()


def test_tag_names(git_helper):
    assert git_helper.tag_names() == ()

    git_helper.create_tag('draft/1.0.0')
    git_helper.create_tag('other')

    assert set(git_helper.tag_names()) == {'draft/1.0.0', 'other'}


def test_log_subjects(git_helper):
    repo = git_helper.repo
    repo.create_tag('draft/1.0.0')
    commit(repo, 'second commit\n\nwith a body')
    commit(repo, 'third commit')

    assert git_helper.log_subjects(since='draft/1.0.0') == (
        '- third commit',
        '- second commit',
    )
    assert git_helper.log_subjects(since=None) == (
        '- third commit',
        '- second commit',
        '- first commit',
    )
    assert git_helper.log_subjects(since='HEAD') == ()
    assert git_helper.log_subjects(since=None, line_format='%s') == (
        'third commit',
        'second commit',
        'first commit',
    )


def test_log_subjects_unknown_ref(git_helper):
    with pytest.raises(git.exc.GitCommandError):
        git_helper.log_subjects(since='draft/does-not-exist')


def test_add_and_commit(git_helper):
    repo = git_helper.repo
    new_file = os.path.join(repo.working_tree_dir, 'new_file.txt')
    with open(new_file, 'w') as f:
        f.write('new_file')

    assert git_helper.changed_file_paths() == ['new_file.txt']

    created = git_helper.add_and_commit(message=':gear: Bump dev version: 1.0.0-dev')

    assert created == repo.head.commit
    assert created.message.strip() == ':gear: Bump dev version: 1.0.0-dev'
    assert git_helper.changed_file_paths() == []
    assert 'new_file.txt' in [blob.path for blob in created.tree.blobs]


def test_add_and_commit_overwrites_author(git_repo):
    helper = gitutil.GitHelper(
        repo=git_repo,
        git_cfg=gitutil.GitCfg(user_name='Release Bot', user_email='bot@example.com'),
    )
    with open(os.path.join(git_repo.working_tree_dir, 'a.txt'), 'w') as f:
        f.write('a')

    created = helper.add_and_commit(message='release')

    assert created.author.name == 'Release Bot'
    assert created.committer.email == 'bot@example.com'


def test_push_and_push_tags(git_helper, tmp_path_factory):
    remote_dir = tmp_path_factory.mktemp('remote')
    remote_repo = git.Repo.init(remote_dir, bare=True)
    git_helper.repo.create_remote('origin', str(remote_dir))

    git_helper.push(from_ref='HEAD', to_ref='refs/heads/release')
    assert remote_repo.commit('refs/heads/release') == git_helper.repo.head.commit

    git_helper.create_tag('draft/1.0.0')
    git_helper.push_tags()
    assert 'draft/1.0.0' in [tag.name for tag in remote_repo.tags]


def test_push_to_unknown_remote(git_helper):
    helper = gitutil.GitHelper(
        repo=git_helper.repo,
        git_cfg=gitutil.GitCfg(remote='does-not-exist'),
    )

    with pytest.raises(ValueError):
        helper.push(from_ref='HEAD', to_ref='refs/heads/master')
