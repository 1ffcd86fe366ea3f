# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import dataclasses
import logging
import os

import git
import git.remote

logger = logging.getLogger(__name__)


@dataclasses.dataclass(kw_only=True, frozen=True)
class GitCfg:
    '''
    Configuration for interacting w/ a git-repository. If no values are set, the underlying
    repository's `.git/config` (or effective git-config) is assumed to be adequately prepared.
    Passed values are used transiently (i.e. .git/config will not be altered).

    user_name: if set, use as author and committer name
    user_email: if set, use as author and committer email
    sign_commits: if set, commits are created w/ `--gpg-sign`
    remote: name of remote to push to
    '''
    user_name: str | None = None
    user_email: str | None = None
    sign_commits: bool = False
    remote: str = 'origin'


class GitHelper:
    def __init__(
        self,
        repo,
        git_cfg: GitCfg=None,
    ):
        if repo is None:
            raise ValueError(repo)
        if isinstance(repo, (str, os.PathLike)):
            repo = git.Repo(repo)
        if not isinstance(repo, git.Repo):
            raise ValueError(repo)

        self.repo = repo
        self.git_cfg = git_cfg or GitCfg()

    def _cmd_env(self) -> dict:
        cmd_env = {}
        if (user := self.git_cfg.user_name):
            cmd_env['GIT_AUTHOR_NAME'] = user
            cmd_env['GIT_COMMITTER_NAME'] = user
        if (email := self.git_cfg.user_email):
            cmd_env['GIT_AUTHOR_EMAIL'] = email
            cmd_env['GIT_COMMITTER_EMAIL'] = email
        return cmd_env

    def tag_names(self) -> tuple[str, ...]:
        '''
        returns the names of all tags (equivalent to `git tag`), in git's (lexical) order
        '''
        logger.info('[git] fetching tags')
        return tuple(tag.name for tag in self.repo.tags)

    def log_subjects(
        self,
        since: str | None,
        until: str='HEAD',
        line_format: str='- %s',
    ) -> tuple[str, ...]:
        '''
        returns one line per commit reachable from `until`, but not from `since` (if given), newest
        commit first. Each line is formatted using `line_format` (see `git log --pretty`); by
        default, the commit's subject, prefixed with `- `.

        raises git.exc.GitCommandError if any of the given refs cannot be resolved
        '''
        if since:
            rev_range = f'{since}..{until}'
        else:
            rev_range = until

        logger.info(f'[git] fetching commit subjects for {rev_range=}')
        stdout = self.repo.git.log(f'--pretty=format:{line_format}', rev_range)

        if not stdout:
            return ()
        return tuple(stdout.split('\n'))

    def changed_file_paths(self) -> list[str]:
        lines = self.repo.git.status('--porcelain=1', '-z').split('\x00')
        # output of git status --porcelain=1 and -z is guaranteed to not change in the future
        return [line[3:] for line in lines if line]

    def add_and_commit(self, message: str) -> git.Commit:
        '''
        adds changed and new files (`git add .`) and creates a commit, updating the current branch
        (`git commit`). If configured, author and committer are overwritten, and the commit is
        signed (which requires a gpg-setup).
        '''
        logger.info('[git] adding files to commit')
        self.repo.git.add('.')

        args = ['--message', message]
        if self.git_cfg.sign_commits:
            args.insert(0, '--gpg-sign')

        logger.info(f'[git] committing with {message=}')
        with self.repo.git.custom_environment(**self._cmd_env()):
            self.repo.git.commit(*args)

        return self.repo.head.commit

    def create_tag(self, name: str) -> git.TagReference:
        logger.info(f'[git] creating new tag: {name}')
        return self.repo.create_tag(name)

    def _remote(self) -> git.remote.Remote:
        return self.repo.remote(self.git_cfg.remote)

    def push(self, from_ref: str, to_ref: str):
        remote = self._remote()
        logger.info(f'[git] pushing {from_ref} to {remote.name}:{to_ref}')
        results = remote.push(':'.join((from_ref, to_ref)))
        _raise_on_push_error(results)

    def push_tags(self):
        remote = self._remote()
        logger.info(f'[git] pushing tags to {remote.name}')
        results = remote.push(tags=True)
        _raise_on_push_error(results)


def _raise_on_push_error(results: git.remote.PushInfoList):
    results.raise_if_error()

    for push_info in results:
        push_info: git.remote.PushInfo
        if push_info.flags & push_info.ERROR:
            raise RuntimeError(
                f'git-push failed for {push_info.remote_ref_string}: {push_info.summary}'
            )
