"""
reads the package version from its version module without importing the package

"""

import os
import re

VERSION_MATCHER = re.compile(r"""^__version__\s*=\s*['"]([^'"]+)['"]""", re.MULTILINE)


def get_project_version(version_file: str) -> str:
    version_file = os.path.join(os.path.dirname(os.path.realpath(__file__)), version_file)
    with open(version_file, encoding="utf-8") as fp:
        match = VERSION_MATCHER.search(fp.read())
    if not match:
        raise Exception("version not available from file %r" % version_file)
    return match.group(1)


if __name__ == "__main__":
    import sys

    print(get_project_version(sys.argv[1]))
