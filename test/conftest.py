import logging

import git
import pytest

from _test_utils import commit


@pytest.fixture(autouse=True)
def restore_root_logger():
    handlers = list(logging.root.handlers)
    level = logging.root.level

    yield

    for handler in list(logging.root.handlers):
        if handler not in handlers:
            logging.root.removeHandler(handler)
    for handler in handlers:
        if handler not in logging.root.handlers:
            logging.root.addHandler(handler)
    logging.root.setLevel(level)


@pytest.fixture
def git_repo(tmp_path):
    repo = git.Repo.init(tmp_path)
    with repo.config_writer() as cfg:
        cfg.set_value('user', 'name', 'Test User')
        cfg.set_value('user', 'email', 'test@example.com')
        cfg.set_value('commit', 'gpgsign', 'false')

    commit(repo, 'first commit')

    return repo
