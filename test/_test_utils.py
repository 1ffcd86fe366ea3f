# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import os

import git


def commit(repo: git.Repo, message: str) -> git.Commit:
    return repo.index.commit(message)


def write_file(path, contents: str):
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, 'w') as f:
        f.write(contents)
