import re
from codecs import open
from os.path import abspath, dirname, join
from setuptools import find_packages, setup

this_dir = abspath(dirname(__file__))
with open(join(this_dir, "README.md"), encoding="utf-8") as file:
    long_description = file.read()
with open(join(this_dir, "mdnsquery", "__init__.py"), encoding="utf-8") as file:
    version = re.search(r'^__version__ = "([^"]+)"', file.read(), re.M).group(1)

setup(
    name="mdnsquery",
    version=version,
    python_requires=">=3.8",
    description="A multicast DNS service discovery query client",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: MacOS",
        "Operating System :: POSIX :: Linux",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Networking",
    ],
    keywords="mdns dns-sd zeroconf cli",
    packages=find_packages(exclude=["docs", "tests"]),
    install_requires=[
        "colorama",
        "ifaddr>=0.1.7",
        "zeroconf>=0.80",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mdnsquery=mdnsquery.cli:main",
        ],
    },
)
