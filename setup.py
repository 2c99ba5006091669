# -*- coding: utf-8 -*-
# Copyright (c) 2024 the lfs-rsync-agent developers
# Licensed under the 2-clause BSD License

from setuptools import setup, find_packages

package_name = "lfs-rsync-agent"

packages = find_packages(exclude=["tests", "tests.*"])

install_reqs = [
    "loguru",
    "pydantic>=2.0",
    "pydantic-settings",
    "sysrsync",
]

test_reqs = [
    "pytest",
]

setup(
    name=package_name,
    version="1.0.0",
    author="lfs-rsync-agent developers",
    license="BSD",
    description="A git-lfs custom transfer agent that stores large files with rsync",
    long_description="""\
git-lfs can hand uploads and downloads over to an external program, a
custom transfer agent, that speaks line-delimited JSON on its standard
streams. This package provides such an agent that keeps large files in a
directory tree reachable by rsync (a local path, a mount, or host:/path).
""",
    python_requires=">=3.10",
    install_requires=install_reqs,
    packages=packages,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Topic :: Software Development :: Version Control :: Git",
    ],
    extras_require={
        "test": test_reqs,
    },
    entry_points={
        "console_scripts": ["git-lfs-rsync-agent=lfs_rsync_agent.cli:main"]
    },
    include_package_data=True,
    zip_safe=False,
)
