"""procstream 入口点。

支持: python -m procstream
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
