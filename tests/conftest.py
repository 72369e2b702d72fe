import sys
from typing import List

collect_ignore_glob: List[str] = []

if not sys.version_info >= (3, 10):
    collect_ignore_glob.append("*min_py310*.py")
