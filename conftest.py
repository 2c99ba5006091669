# -*- coding: utf-8 -*-
# Copyright (c) 2024 the lfs-rsync-agent developers
# Licensed under the 2-clause BSD License
"""Define config for pytest

"""


# ignore symlinked directories
def pytest_ignore_collect(collection_path, config):
    if collection_path.is_dir() and collection_path.is_symlink():
        return True
